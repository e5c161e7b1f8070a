from fastapi import APIRouter, Depends, Query

from app.api.responses import json_response
from app.services.category_service import build_category_buckets, group_by_category
from app.services.listing_service import DEFAULT_SORT, paginate, sort_products
from app.services.product_service import CatalogService, get_catalog
from app.services.query_service import ProductQuery

router = APIRouter()

# Every parameter is taken as a raw string and coerced, so malformed values
# fall back to defaults instead of producing a 422.


@router.get("")
async def list_products(
    q: str | None = None,
    category: str | None = None,
    sort: str | None = None,
    page: str | None = None,
    limit: str | None = None,
    product_type: str | None = Query(None, alias="type"),
    in_stock: str | None = Query(None, alias="inStock"),
    featured: str | None = None,
    published: str | None = None,
    catalog: CatalogService = Depends(get_catalog),
):
    query = ProductQuery.from_params(
        q=q,
        product_type=product_type,
        in_stock=in_stock,
        featured=featured,
        published=published,
        category=category,
    )
    products = await catalog.find_products(query)

    ordered = sort_products(products, (sort or DEFAULT_SORT).strip())
    result = paginate(ordered, page, limit)
    types = sorted(
        {p["Type"] for p in products if p.get("Type") and not isinstance(p["Type"], (list, dict))},
        key=str,
    )

    return json_response({
        "items": result.items,
        "pagination": result.pagination(),
        "filters": {
            "categories": build_category_buckets(products),
            "types": types,
        },
    })


@router.get("/grouped-by-category")
async def products_grouped_by_category(
    q: str | None = None,
    catalog: CatalogService = Depends(get_catalog),
):
    products = await catalog.find_products(ProductQuery.from_params(q=q))
    return json_response({"items": group_by_category(products)})


@router.get("/{product_id}")
async def get_product(product_id: str, catalog: CatalogService = Depends(get_catalog)):
    item = await catalog.get_product(product_id)
    return json_response({"item": item})
