from collections.abc import Mapping
from typing import Any

from app.normalizer.categorize import map_category
from app.normalizer.fields import ProductRecord, slugify


def normalize_product(raw: Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Build the normalized product for one raw store document.

    All raw fields are kept verbatim; the derived fields are layered on top.
    Pure and idempotent: normalizing a normalized product gives the same
    derived fields back.
    """
    record = ProductRecord(raw)
    top_category = map_category(record.category_text)
    images = record.images

    normalized = dict(record)
    normalized.update({
        "id": record.record_id,
        "topCategory": top_category,
        "categorySlug": slugify(top_category),
        "imageList": images,
        "heroImage": record.hero_image or (images[0] if images else ""),
        "inStock": bool(record.in_stock),
        "isFeatured": bool(record.is_featured),
        "isPublished": bool(record.is_published),
    })
    return normalized


def normalize_products(docs) -> list[dict[str, Any]]:
    return [normalize_product(doc) for doc in docs]
