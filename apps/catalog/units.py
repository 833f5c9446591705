"""Display helpers for variant unit sizes (e.g. "500g", "1.5kg", "6 bunches")."""
from decimal import Decimal

WEIGHT_UNITS = {
    1.0: "g",
    28.35: "oz",
    453.6: "lb",
    1000.0: "kg",
    1000000.0: "T",
}

VOLUME_UNITS = {
    0.001: "mL",
    1.0: "L",
    1000.0: "kL",
}


def format_number(value) -> str:
    """Format a number without a trailing ".0"."""
    number = Decimal(str(value)).normalize()
    text = format(number, "f")
    return text


def unit_suffix(variant_unit, scale):
    if variant_unit == "weight":
        return WEIGHT_UNITS.get(float(scale or 1.0), "g")
    if variant_unit == "volume":
        return VOLUME_UNITS.get(float(scale or 1.0), "L")
    return ""


def unit_presentation(variant_unit, scale, unit_value, unit_name="") -> str:
    """Return the human readable size for a variant, or "" when unknown."""
    if unit_value is None:
        return ""
    if variant_unit in ("weight", "volume"):
        scaled = float(unit_value) / float(scale or 1.0)
        return f"{format_number(round(scaled, 3))}{unit_suffix(variant_unit, scale)}"
    if variant_unit == "items":
        return f"{format_number(unit_value)} {unit_name}".strip()
    return ""
