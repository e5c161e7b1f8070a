import math
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel

from app.normalizer.fields import ProductRecord

DEFAULT_SORT = "featured"

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 60


# ---------- sorting ----------

def _name_key(product: dict[str, Any]) -> tuple[str, str]:
    name = ProductRecord(product).name
    return name.casefold(), name


def created_timestamp(value: Any) -> float:
    """Seconds since epoch for a createdAt value; 0 when missing or unreadable."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        # numeric timestamps are stored in milliseconds
        return value / 1000
    if isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return 0.0
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.timestamp()
    return 0.0


def sort_products(products: list[dict[str, Any]], sort_by: str | None = DEFAULT_SORT) -> list[dict[str, Any]]:
    """Stable sort into a new list; unknown keys fall back to featured-first."""
    if sort_by == "name-asc":
        return sorted(products, key=_name_key)
    if sort_by == "name-desc":
        return sorted(products, key=_name_key, reverse=True)
    if sort_by == "newest":
        return sorted(products, key=lambda p: created_timestamp(ProductRecord(p).created_at), reverse=True)
    return sorted(products, key=lambda p: not p.get("isFeatured"))


# ---------- pagination ----------

def _to_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _to_int(value: Any) -> int | None:
    number = _to_number(value)
    return None if number is None else math.floor(number)


def parse_page(value: Any) -> int:
    return max(1, _to_int(value) or 1)


def parse_limit(value: Any) -> int:
    # zero and non-numeric mean "unset"; a positive fraction below 1 still clamps to 1
    number = _to_number(value)
    if not number:
        return DEFAULT_PAGE_SIZE
    return max(1, min(MAX_PAGE_SIZE, math.floor(number)))


class Page(BaseModel):
    items: list[dict[str, Any]] = []
    total: int = 0
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    total_pages: int = 0

    def pagination(self) -> dict[str, int]:
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
        }


def paginate(products: list[dict[str, Any]], page: Any = 1, limit: Any = DEFAULT_PAGE_SIZE) -> Page:
    page = parse_page(page)
    limit = parse_limit(limit)
    total = len(products)
    start = (page - 1) * limit
    return Page(
        items=products[start:start + limit],
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )
