"""Mass unit conversion for nutrient totals and goals.

Only the mass family (g, mg, µg) is converted. Any other pair, such as IU or
mL, is returned unchanged.
"""

_MASS_FACTORS: dict[str, float] = {
    "g": 1.0,
    "mg": 1_000.0,
    "mcg": 1_000_000.0,
}

_ALIASES: dict[str, str] = {
    "gram": "g",
    "grams": "g",
    "milligram": "mg",
    "milligrams": "mg",
    "µg": "mcg",
    "μg": "mcg",
    "ug": "mcg",
    "microgram": "mcg",
    "micrograms": "mcg",
}


def normalize_unit(unit: str | None) -> str:
    """Return a canonical lowercase unit label."""
    if unit is None:
        return ""
    cleaned = unit.strip().lower()
    return _ALIASES.get(cleaned, cleaned)


def is_mass_unit(unit: str | None) -> bool:
    """Return whether a unit belongs to the mass family."""
    return normalize_unit(unit) in _MASS_FACTORS


def is_convertible(from_unit: str | None, to_unit: str | None) -> bool:
    """Return whether a value can be expressed in another unit without loss."""
    source = normalize_unit(from_unit)
    target = normalize_unit(to_unit)
    if source == target:
        return True
    return source in _MASS_FACTORS and target in _MASS_FACTORS


def convert(value: float, from_unit: str | None, to_unit: str | None) -> float:
    """Convert a value between mass units, passing other pairs through."""
    source = normalize_unit(from_unit)
    target = normalize_unit(to_unit)
    if source == target:
        return value
    if source not in _MASS_FACTORS or target not in _MASS_FACTORS:
        return value
    source_factor = _MASS_FACTORS[source]
    target_factor = _MASS_FACTORS[target]
    if target_factor >= source_factor:
        return value * (target_factor / source_factor)
    return value / (source_factor / target_factor)
