"""
Product query composition.

A ProductQuery is a list of clauses. Every clause compiles two ways:

  - to_filter(): a MongoDB filter fragment over raw documents, or None
    when the clause can only be decided after normalization
  - matches(product): direct evaluation over a normalized product

The store path runs store_filter() in the database and post_filter() on the
normalized result; the fallback path runs matches() on every normalized
product. Both select the same products.
"""
import re
from enum import Enum
from typing import Any

from app.normalizer.fields import (
    CATEGORY_FIELDS,
    FEATURED_FIELDS,
    IN_STOCK_FIELDS,
    PUBLISHED_FIELDS,
    TEXT_SEARCH_FIELDS,
    TRUE_VALUES,
    TYPE_FIELD,
    ProductRecord,
    slugify,
    to_bool,
)


class TriState(str, Enum):
    ANY = "any"
    TRUE = "true"
    FALSE = "false"

    @classmethod
    def parse(cls, value: Any) -> "TriState":
        """Absent or unrecognized values mean no constraint."""
        coerced = to_bool(value)
        if coerced is None:
            return cls.ANY
        return cls.TRUE if coerced else cls.FALSE


class TextClause:
    def __init__(self, q: str, fields: tuple[str, ...] = TEXT_SEARCH_FIELDS):
        self.q = q
        self.needle = q.lower()
        self.fields = fields

    def to_filter(self) -> dict[str, Any]:
        pattern = re.escape(self.q)
        return {"$or": [{field: {"$regex": pattern, "$options": "i"}} for field in self.fields]}

    def matches(self, product: dict[str, Any]) -> bool:
        record = ProductRecord(product)
        return any(
            self.needle in value.lower()
            for field in self.fields
            for value in record.string_values(field)
        )


class TypeClause:
    def __init__(self, product_type: str):
        self.product_type = product_type

    def to_filter(self) -> dict[str, Any]:
        return {TYPE_FIELD: self.product_type}

    def matches(self, product: dict[str, Any]) -> bool:
        value = ProductRecord(product).product_type
        if isinstance(value, (list, tuple)):
            return self.product_type in value
        return value == self.product_type


class FlagClause:
    """
    Tri-state flag over a chain of field-name variants.

    The first non-null variant decides; unset or unparseable counts as false,
    so FALSE also selects records that carry none of the variants.
    """

    def __init__(self, fields: tuple[str, ...], wanted: TriState):
        self.fields = fields
        self.wanted = wanted

    def _truthy_filter(self, fields: tuple[str, ...]) -> dict[str, Any]:
        head, rest = fields[0], fields[1:]
        is_true = {head: {"$in": list(TRUE_VALUES)}}
        if not rest:
            return is_true
        return {"$or": [is_true, {"$and": [{head: None}, self._truthy_filter(rest)]}]}

    def to_filter(self) -> dict[str, Any]:
        truthy = self._truthy_filter(self.fields)
        if self.wanted is TriState.TRUE:
            return truthy
        return {"$nor": [truthy]}

    def matches(self, product: dict[str, Any]) -> bool:
        flag = bool(to_bool(ProductRecord(product).first_present(self.fields)))
        return flag is (self.wanted is TriState.TRUE)


class CategoryClause:
    """
    Loose category match: exact slug, or the requested slug contained in the
    resolved category or in the raw category text. "ups" therefore also
    selects "ups-accessories".
    """

    def __init__(self, category: str):
        self.slug = slugify(category)

    def to_filter(self) -> None:
        return None

    def matches(self, product: dict[str, Any]) -> bool:
        if product.get("categorySlug") == self.slug:
            return True
        if self.slug in slugify(product.get("topCategory") or ""):
            return True
        raw_text = ProductRecord(product).first_truthy(CATEGORY_FIELDS) or ""
        return self.slug in slugify(raw_text)


class ProductQuery:
    def __init__(
        self,
        q: str = "",
        product_type: str = "",
        in_stock: TriState = TriState.ANY,
        featured: TriState = TriState.ANY,
        published: TriState = TriState.ANY,
        category: str = "",
    ):
        self.q = q
        self.product_type = product_type
        self.in_stock = in_stock
        self.featured = featured
        self.published = published
        self.category = category

        self.clauses: list = []
        if q:
            self.clauses.append(TextClause(q))
        if product_type:
            self.clauses.append(TypeClause(product_type))
        for fields, wanted in (
            (IN_STOCK_FIELDS, in_stock),
            (FEATURED_FIELDS, featured),
            (PUBLISHED_FIELDS, published),
        ):
            if wanted is not TriState.ANY:
                self.clauses.append(FlagClause(fields, wanted))
        if category and slugify(category):
            self.clauses.append(CategoryClause(category))

    @classmethod
    def from_params(
        cls,
        q: str | None = None,
        product_type: str | None = None,
        in_stock: str | None = None,
        featured: str | None = None,
        published: str | None = None,
        category: str | None = None,
    ) -> "ProductQuery":
        return cls(
            q=(q or "").strip(),
            product_type=(product_type or "").strip(),
            in_stock=TriState.parse(in_stock),
            featured=TriState.parse(featured),
            published=TriState.parse(published),
            category=(category or "").strip(),
        )

    def store_filter(self) -> dict[str, Any]:
        fragments = [f for f in (clause.to_filter() for clause in self.clauses) if f is not None]
        if not fragments:
            return {}
        if len(fragments) == 1:
            return fragments[0]
        return {"$and": fragments}

    def post_filter(self, product: dict[str, Any]) -> bool:
        """Clauses the store cannot evaluate on raw documents."""
        return all(clause.matches(product) for clause in self.clauses if clause.to_filter() is None)

    def matches(self, product: dict[str, Any]) -> bool:
        return all(clause.matches(product) for clause in self.clauses)

    def __repr__(self) -> str:
        return (
            f"ProductQuery(q={self.q!r}, type={self.product_type!r}, in_stock={self.in_stock.value}, "
            f"featured={self.featured.value}, published={self.published.value}, category={self.category!r})"
        )
