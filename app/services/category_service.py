from typing import Any

from app.normalizer.categorize import MAIN_CATEGORY_INDEX, UNCATEGORIZED, category_sort_key
from app.normalizer.fields import ProductRecord


def sort_categories(buckets: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Canonical category order first, then everything else by name."""
    return sorted(buckets, key=lambda bucket: category_sort_key(bucket["name"]))


def _bucket_key(product: dict[str, Any]) -> tuple[str, str]:
    slug = product.get("categorySlug") or "uncategorized"
    name = product.get("topCategory") or UNCATEGORIZED
    return slug, name


def build_category_buckets(products: list[dict[str, Any]]) -> list[dict[str, Any]]:
    buckets: dict[str, dict[str, Any]] = {}
    for product in products:
        slug, name = _bucket_key(product)
        bucket = buckets.setdefault(slug, {"name": name, "slug": slug, "count": 0})
        bucket["count"] += 1
    return sort_categories(list(buckets.values()))


def group_by_category(products: list[dict[str, Any]]) -> list[dict[str, Any]]:
    groups: dict[str, dict[str, Any]] = {}
    for product in products:
        slug, name = _bucket_key(product)
        group = groups.setdefault(slug, {"name": name, "slug": slug, "count": 0, "items": []})
        group["count"] += 1
        group["items"].append(product)
    return sort_categories(list(groups.values()))


def unmapped_categories(products: list[dict[str, Any]], samples: int = 3) -> list[dict[str, Any]]:
    """
    Resolved categories outside the canonical taxonomy, with a few of the raw
    category strings that produced them. Used to spot new phrasings that
    need a resolver rule.
    """
    report: dict[str, dict[str, Any]] = {}
    for product in products:
        name = product.get("topCategory") or UNCATEGORIZED
        if name in MAIN_CATEGORY_INDEX:
            continue
        entry = report.setdefault(name, {"name": name, "count": 0, "samples": []})
        entry["count"] += 1
        raw_text = ProductRecord(product).category_text
        if raw_text and raw_text not in entry["samples"] and len(entry["samples"]) < samples:
            entry["samples"].append(raw_text)
    return sorted(report.values(), key=lambda entry: (-entry["count"], entry["name"]))
