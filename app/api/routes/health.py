from fastapi import APIRouter, Depends

from app.api.responses import json_response
from app.errors import StoreUnavailable
from app.services.product_service import CatalogService, get_catalog

router = APIRouter()


@router.get("")
async def health(catalog: CatalogService = Depends(get_catalog)):
    try:
        await catalog.use_store()
    except StoreUnavailable as e:
        return json_response({"ok": False, "message": e.message}, status_code=500)
    return {"ok": True, "dbConnected": catalog.connection.connected}
