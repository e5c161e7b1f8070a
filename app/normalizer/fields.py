import re
from collections.abc import Mapping
from typing import Any, Iterator

# ----------------------------
# Recognized field-name variants (first present wins)
# ----------------------------

ID_FIELDS = ("_id", "id", "ID", "SKU")
NAME_FIELDS = ("Name", "name")
TYPE_FIELD = "Type"
CATEGORY_FIELDS = ("Categories", "category")
IMAGES_FIELD = "Images"
HERO_IMAGE_FIELD = "heroImage"
CREATED_AT_FIELD = "createdAt"

IN_STOCK_FIELDS = ("In stock?", "inStock")
FEATURED_FIELDS = ("Is featured?", "isFeatured")
PUBLISHED_FIELDS = ("Published", "published", "isPublished")

TEXT_SEARCH_FIELDS = ("Name", "SKU", "Description", "descriptionText")

# values a flag field may hold to count as true, in store-query form
TRUE_VALUES = (True, 1, "1", "true")

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(value: Any = "") -> str:
    """
    Lowercase, hyphenated, URL-safe form of a display name.
    "Racks & Cabinets" -> "racks-and-cabinets"
    """
    if value is None:
        value = ""
    text = str(value).strip().lower().replace("&", "and")
    return _NON_SLUG_CHARS.sub("-", text).strip("-")


def to_bool(value: Any) -> bool | None:
    """
    Coerce a mixed-encoding boolean. Returns None ("unset") for anything
    that is not one of the recognized encodings.
    """
    if value is True or value is False:
        return value
    if isinstance(value, (int, float)):
        if value == 1:
            return True
        if value == 0:
            return False
        return None
    if value in ("1", "true"):
        return True
    if value in ("0", "false"):
        return False
    return None


def stringify_id(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


class ProductRecord(Mapping):
    """
    Read-only view over a raw product document.

    Keeps every field of the source (unknown keys included) and adds typed
    accessors for the recognized field-name variants.
    """

    def __init__(self, doc: Mapping[str, Any] | None):
        self._doc = doc if doc is not None else {}

    def __getitem__(self, key: str) -> Any:
        return self._doc[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._doc)

    def __len__(self) -> int:
        return len(self._doc)

    def first_truthy(self, fields: tuple[str, ...]) -> Any:
        for field in fields:
            value = self._doc.get(field)
            if value:
                return value
        return None

    def first_present(self, fields: tuple[str, ...]) -> Any:
        for field in fields:
            value = self._doc.get(field)
            if value is not None:
                return value
        return None

    @property
    def record_id(self) -> str:
        value = self.first_truthy(ID_FIELDS)
        return stringify_id(value) if value else ""

    @property
    def name(self) -> str:
        value = self.first_truthy(NAME_FIELDS)
        return str(value) if value else ""

    @property
    def product_type(self) -> Any:
        return self._doc.get(TYPE_FIELD)

    @property
    def category_text(self) -> str:
        value = self.first_truthy(CATEGORY_FIELDS)
        return str(value).strip() if value else ""

    @property
    def images(self) -> list[str]:
        raw = self._doc.get(IMAGES_FIELD)
        if isinstance(raw, (list, tuple)):
            return [entry for entry in raw if entry]
        if isinstance(raw, str):
            return [entry.strip() for entry in raw.split(",") if entry.strip()]
        return []

    @property
    def hero_image(self) -> str:
        value = self._doc.get(HERO_IMAGE_FIELD)
        return value if value else ""

    @property
    def created_at(self) -> Any:
        return self._doc.get(CREATED_AT_FIELD)

    @property
    def in_stock(self) -> bool | None:
        return to_bool(self.first_present(IN_STOCK_FIELDS))

    @property
    def is_featured(self) -> bool | None:
        return to_bool(self.first_present(FEATURED_FIELDS))

    @property
    def is_published(self) -> bool | None:
        return to_bool(self.first_present(PUBLISHED_FIELDS))

    def string_values(self, field: str) -> list[str]:
        # a store regex only ever matches strings, or strings inside an array
        value = self._doc.get(field)
        if isinstance(value, str):
            return [value]
        if isinstance(value, (list, tuple)):
            return [entry for entry in value if isinstance(entry, str)]
        return []
