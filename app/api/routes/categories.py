from fastapi import APIRouter, Depends

from app.services.category_service import build_category_buckets
from app.services.product_service import CatalogService, get_catalog

router = APIRouter()


@router.get("")
async def list_categories(catalog: CatalogService = Depends(get_catalog)):
    products = await catalog.list_category_products()
    return {"items": build_category_buckets(products)}
