"""Singular/plural conversion for business-object codes.

View files are named after the singular object (``asset-detail``) while
object codes are plural (``assets``). Stripping a trailing ``s`` is wrong
for irregular plurals (``opportunities``, ``addresses``, ``people``), so the
conversion checks an irregular table first and then applies suffix rules.
"""

IRREGULAR_PLURALS: dict[str, str] = {
    # Common CRM objects
    "opportunities": "opportunity",
    "companies": "company",
    "categories": "category",
    "activities": "activity",
    "properties": "property",
    "entries": "entry",
    "histories": "history",
    "territories": "territory",
    "deliveries": "delivery",
    "inventories": "inventory",
    "currencies": "currency",
    "countries": "country",
    "industries": "industry",
    # Standard irregular words
    "people": "person",
    "men": "man",
    "women": "woman",
    "children": "child",
    "mice": "mouse",
    "feet": "foot",
    "teeth": "tooth",
    "geese": "goose",
    # Words ending in 'es' that need special handling
    "addresses": "address",
    "statuses": "status",
    "taxes": "tax",
    "boxes": "box",
    "businesses": "business",
    "processes": "process",
}

_SIBILANT_ENDINGS = ("s", "x", "z", "ch", "sh")


def to_singular(plural: str) -> str:
    """Convert a plural word to its singular form.

    >>> to_singular("assets")
    'asset'
    >>> to_singular("opportunities")
    'opportunity'
    >>> to_singular("watches")
    'watch'
    """
    lower = plural.lower()

    if lower in IRREGULAR_PLURALS:
        return IRREGULAR_PLURALS[lower]

    if lower.endswith("ies"):
        return lower[:-3] + "y"

    if lower.endswith("es"):
        stem = lower[:-2]
        if stem.endswith(_SIBILANT_ENDINGS):
            return stem
        # 'types' -> 'type'
        return lower[:-1]

    if lower.endswith("s"):
        return lower[:-1]

    return lower


def to_plural(singular: str) -> str:
    """Convert a singular word to its plural form.

    >>> to_plural("asset")
    'assets'
    >>> to_plural("company")
    'companies'
    """
    lower = singular.lower()

    for plural, sing in IRREGULAR_PLURALS.items():
        if sing == lower:
            return plural

    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        return lower[:-1] + "ies"

    if lower.endswith(_SIBILANT_ENDINGS):
        return lower + "es"

    return lower + "s"


def capitalize(text: str) -> str:
    if not text:
        return text
    return text[0].upper() + text[1:]


def get_singular_label(object_code: str) -> str:
    """Human-readable singular label, e.g. ``'assets'`` -> ``'Asset'``."""
    return capitalize(to_singular(object_code))


def get_plural_label(object_code: str) -> str:
    return capitalize(object_code)
