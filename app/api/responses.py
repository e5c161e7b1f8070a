from typing import Any

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

# raw store documents carry ObjectIds, which the default encoder cannot handle
BSON_ENCODERS = {ObjectId: str}


def json_response(payload: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(jsonable_encoder(payload, custom_encoder=BSON_ENCODERS), status_code=status_code)
