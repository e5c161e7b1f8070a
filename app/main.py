import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.responses import json_response
from app.api.router import api_router
from app.config import settings
from app.database.mongo import mongo
from app.errors import CatalogError, StoreUnavailable

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if not mongo.enabled:
        logger.info("▶ No MONGODB_URI configured, serving fallback dataset")
    else:
        try:
            await mongo.ensure_connected()
        except StoreUnavailable as e:
            if settings.FALLBACK_ON_STARTUP_FAILURE:
                mongo.disable(e.message)
            else:
                logger.warning(f"Product store unreachable at startup, requests will retry: {e.message}")
    yield
    await mongo.close()


app = FastAPI(title="Product Catalog API", lifespan=lifespan)


class UnexpectedErrorMiddleware(BaseHTTPMiddleware):
    """Unhandled errors become a JSON 500 {message} inside the CORS layer."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}")
            return json_response({"message": str(e)}, status_code=500)


# must be added before CORSMiddleware, which then wraps it
app.add_middleware(UnexpectedErrorMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return json_response({"message": exc.message}, status_code=exc.status_code)


def run():
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
