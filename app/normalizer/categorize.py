from app.normalizer.fields import slugify

UNCATEGORIZED = "Uncategorized"

MAIN_CATEGORY_ORDER = [
    "BATTERY",
    "COPPER ACCESSORIES",
    "COPPER CABLES",
    "ELEVATOR CABLES",
    "FIBER ACCESSORIES",
    "FIBER CABLES",
    "PDU",
    "RACK ACCESSORIES",
    "RACKS AND CABINETS",
    "TELECOM IP RACKS",
    "UPS",
    "UPS ACCESSORIES",
]

MAIN_CATEGORY_INDEX: dict[str, int] = {name: i for i, name in enumerate(MAIN_CATEGORY_ORDER)}

# Most specific first: "ups accessories" must win over the bare "ups" rule,
# "rack accessories" over anything that only mentions racks, etc.
CATEGORY_RULES: list[tuple[tuple[str, ...], str]] = [
    (("ups accessories", "ups accessory"), "UPS ACCESSORIES"),
    (("telecom ip racks", "telecom ip rack"), "TELECOM IP RACKS"),
    (("racks and cabinets", "rack and cabinet"), "RACKS AND CABINETS"),
    (("rack accessories", "rack accessory"), "RACK ACCESSORIES"),
    (("fiber accessories", "fiber accessory"), "FIBER ACCESSORIES"),
    (("fiber cables", "fiber cable"), "FIBER CABLES"),
    (("copper accessories", "copper accessory"), "COPPER ACCESSORIES"),
    (("copper cables", "copper cable"), "COPPER CABLES"),
    (("elevator cables", "elevator cable"), "ELEVATOR CABLES"),
    (("battery", "batteries"), "BATTERY"),
    (("pdu", "power distribution unit"), "PDU"),
    (("ups",), "UPS"),
]


def normalize_category_text(value: str) -> str:
    """'UPS > Single-Phase, Online' -> 'ups single phase online'"""
    return slugify(value).replace("-", " ")


def match_category_rule(text: str) -> str | None:
    for needles, category in CATEGORY_RULES:
        if any(needle in text for needle in needles):
            return category
    return None


def resolve_category(top_segment: str | None, full_text: str | None = "") -> str:
    """
    Map free-form category text to one of the canonical top-level categories.

    The first segment is checked before the full text, and the first rule
    that matches a candidate wins. When nothing matches, an exact canonical
    name in the first segment is still honoured; otherwise the segment is
    kept as an ad-hoc category.
    """
    candidates = [normalize_category_text(v) for v in (top_segment, full_text) if v]

    for candidate in candidates:
        category = match_category_rule(candidate)
        if category:
            return category

    segment = str(top_segment or "").strip()
    if segment.upper() in MAIN_CATEGORY_INDEX:
        return segment.upper()

    return segment or UNCATEGORIZED


def split_top_segment(category_text: str) -> str:
    """First level of a 'Parent > Child, Other' category string."""
    first = category_text.split(">")[0] or category_text
    first = first.split(",")[0] or category_text
    return first.strip()


def map_category(category_text: str | None) -> str:
    text = str(category_text or "").strip()
    if not text:
        return UNCATEGORIZED
    return resolve_category(split_top_segment(text), text)


def category_sort_key(name: str) -> tuple[int, str]:
    # unknown categories go after every canonical one
    return MAIN_CATEGORY_INDEX.get(name, len(MAIN_CATEGORY_ORDER)), name
