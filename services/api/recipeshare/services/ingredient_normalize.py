import re
from typing import Optional

# Spelling -> canonical abbreviation. Anything not listed is kept
# (case-folded) as its own unit.
UNIT_ALIASES = {
    # Volume
    "teaspoon": "tsp", "teaspoons": "tsp", "tsps": "tsp",
    "tablespoon": "tbsp", "tablespoons": "tbsp", "tbsps": "tbsp", "tbs": "tbsp", "tbl": "tbsp",
    "cups": "cup",
    "milliliter": "ml", "milliliters": "ml", "millilitre": "ml", "millilitres": "ml", "mls": "ml",
    "liter": "l", "liters": "l", "litre": "l", "litres": "l",
    "fluid ounce": "fl oz", "fluid ounces": "fl oz", "fl. oz": "fl oz", "floz": "fl oz",
    "pint": "pt", "pints": "pt",
    "quart": "qt", "quarts": "qt",
    # Mass
    "gram": "g", "grams": "g", "gr": "g", "grs": "g",
    "kilogram": "kg", "kilograms": "kg", "kilo": "kg", "kilos": "kg", "kgs": "kg",
    "milligram": "mg", "milligrams": "mg",
    "ounce": "oz", "ounces": "oz",
    "pound": "lb", "pounds": "lb", "lbs": "lb",
    # Count-ish
    "cloves": "clove",
    "cans": "can",
    "slices": "slice",
    "pieces": "piece", "pc": "piece", "pcs": "piece",
    "bunches": "bunch",
    "pinches": "pinch",
    "packages": "package", "pkg": "package",
}


def normalize_name_key(name: str) -> str:
    """Case-folded, whitespace-collapsed ingredient name used for matching."""
    return re.sub(r"\s+", " ", name or "").strip().casefold()


def normalize_unit(unit: Optional[str]) -> Optional[str]:
    """Canonical unit, or None for blank input.

    Trailing dots are ignored ("tbsp." == "tbsp").
    """
    if unit is None:
        return None
    u = re.sub(r"\s+", " ", unit).strip().casefold().rstrip(".")
    if not u:
        return None
    return UNIT_ALIASES.get(u, u)


def display_name(name: str) -> str:
    return re.sub(r"\s+", " ", name or "").strip()
