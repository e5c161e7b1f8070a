import asyncio
import json
import os
import sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(ROOT)

from app.services.category_service import build_category_buckets, unmapped_categories
from app.services.product_service import catalog


async def audit_categories():
    """
    Print the category buckets of the whole catalog and every category the
    resolver could not map onto the canonical taxonomy.
    """
    source = "MongoDB" if catalog.connection.enabled else "fallback dataset"
    print(f"▶ Auditing categories from {source}...")

    products = await catalog.list_category_products()
    buckets = build_category_buckets(products)
    unmapped = unmapped_categories(products)

    print(json.dumps({"buckets": buckets, "unmapped": unmapped}, indent=2, ensure_ascii=False))
    print(f"✔ {len(products)} products, {len(buckets)} categories, {len(unmapped)} outside the taxonomy")

    await catalog.connection.close()
    return {"products": len(products), "categories": len(buckets), "unmapped": len(unmapped)}


if __name__ == "__main__":
    asyncio.run(audit_categories())
