import logging
import math
import re
from typing import Any

from bson import ObjectId
from pymongo.errors import PyMongoError

from app.config import settings
from app.data.fallback_products import FALLBACK_PRODUCTS
from app.database.mongo import MongoConnection, mongo
from app.errors import ProductNotFound, StoreUnavailable
from app.normalizer.fields import stringify_id
from app.normalizer.pipeline import normalize_product, normalize_products
from app.services.query_service import ProductQuery

logger = logging.getLogger(__name__)

LIST_PROJECTION = {
    field: 1
    for field in (
        "_id", "id", "ID", "Type", "SKU", "Name", "Published", "Is featured?", "In stock?",
        "Categories", "category", "Images", "heroImage", "short", "descriptionText",
        "specs", "detailRows", "features", "datasheet", "createdAt",
        # read by filters and the normalizer, so the store path sees what the fallback path sees
        "name", "Description", "inStock", "isFeatured", "published", "isPublished",
    )
}

CATEGORY_PROJECTION = {"Categories": 1, "category": 1}

_INTEGER = re.compile(r"^\s*-?\d+\s*$")


def numeric_id(value: str) -> Any:
    """'2276' -> 2276, '22.5' -> 22.5; anything else unchanged."""
    if _INTEGER.match(value):
        return int(value)
    try:
        number = float(value)
    except ValueError:
        return value
    return number if math.isfinite(number) else value


class CatalogService:
    """
    Reads raw product documents from the store when one is connected,
    otherwise from the fallback dataset, and returns normalized products.
    """

    def __init__(self, connection: MongoConnection | None = None, fallback: list[dict] | None = None):
        self.connection = connection if connection is not None else mongo
        self.fallback = FALLBACK_PRODUCTS if fallback is None else fallback

    async def use_store(self) -> bool:
        return await self.connection.ensure_connected()

    async def _find(self, query: dict, projection: dict, timeout_ms: int) -> list[dict]:
        try:
            cursor = self.connection.collection.find(query, projection, max_time_ms=timeout_ms)
            return await cursor.to_list(None)
        except PyMongoError as e:
            logger.exception(f"Product query failed: {query}")
            raise StoreUnavailable(str(e)) from e

    async def list_category_products(self) -> list[dict[str, Any]]:
        if await self.use_store():
            docs = await self._find({}, CATEGORY_PROJECTION, settings.QUERY_TIMEOUT_MS)
        else:
            docs = self.fallback
        return normalize_products(docs)

    async def find_products(self, query: ProductQuery) -> list[dict[str, Any]]:
        if await self.use_store():
            store_filter = query.store_filter()
            docs = await self._find(store_filter, LIST_PROJECTION, settings.LIST_QUERY_TIMEOUT_MS)
            products = [p for p in normalize_products(docs) if query.post_filter(p)]
            logger.info(f"{query!r}: {len(docs)} from store, {len(products)} after category filter")
            return products

        return [p for p in normalize_products(self.fallback) if query.matches(p)]

    async def get_product(self, product_id: str) -> dict[str, Any]:
        if await self.use_store():
            doc = await self._find_one_in_store(product_id)
        else:
            doc = self._find_one_in_fallback(product_id)

        if not doc:
            raise ProductNotFound(product_id)
        return normalize_product(doc)

    async def _find_one_in_store(self, product_id: str) -> dict | None:
        candidates: list[dict[str, Any]] = [
            {"id": product_id},
            {"SKU": product_id},
            {"ID": numeric_id(product_id)},
        ]
        if ObjectId.is_valid(product_id):
            candidates.insert(0, {"_id": ObjectId(product_id)})

        try:
            return await self.connection.collection.find_one(
                {"$or": candidates},
                max_time_ms=settings.QUERY_TIMEOUT_MS,
            )
        except PyMongoError as e:
            logger.exception(f"Product lookup failed for id={product_id}")
            raise StoreUnavailable(str(e)) from e

    def _find_one_in_fallback(self, product_id: str) -> dict | None:
        for doc in self.fallback:
            keys = [doc.get(field) for field in ("_id", "id", "SKU", "ID")]
            if product_id in [stringify_id(k) if k is not None else "" for k in keys]:
                return doc
        return None


catalog = CatalogService()


def get_catalog() -> CatalogService:
    return catalog
