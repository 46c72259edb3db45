"""Aggregation of scaled nutrient contributions across plate entries."""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from plate_nutrition.domain.catalog import (
    Aggregation,
    Computation,
    ComputedSource,
    MacroSource,
    MacroType,
    NutrientCatalog,
    NutrientRowDescriptor,
    NutrientSource,
    canonical_key,
)
from plate_nutrition.domain.foods import PlateEntry
from plate_nutrition.services.servings import scaling_factor
from plate_nutrition.services.units import convert, is_convertible

_logger = logging.getLogger(__name__)

_FIBER_UNIT = "g"


class UnitMismatchError(ValueError):
    """Raised when items report one nutrient in incompatible units."""


@dataclass(frozen=True)
class AggregatedNutrient:
    """Scaled total for one canonical nutrient key."""

    value: float
    unit: str


ItemNutrients = dict[str, AggregatedNutrient]


@dataclass(frozen=True)
class NutrientTotals(Mapping[str, AggregatedNutrient]):
    """Plate totals by canonical key, plus each active item's scaled values.

    Synonym lookups choose a name per item from ``per_item`` and then sum
    across items, so items naming one nutrient differently all count.
    """

    by_key: dict[str, AggregatedNutrient] = field(default_factory=dict)
    per_item: tuple[ItemNutrients, ...] = ()

    def __getitem__(self, key: str) -> AggregatedNutrient:
        return self.by_key[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.by_key)

    def __len__(self) -> int:
        return len(self.by_key)


def _scaled_nutrients(entry: PlateEntry) -> ItemNutrients:
    scale = scaling_factor(entry.state, entry.item.measures)
    scaled: ItemNutrients = {}
    for record in entry.item.nutrients:
        key = canonical_key(record.raw_name)
        contribution = record.value * scale
        existing = scaled.get(key)
        if existing is None:
            scaled[key] = AggregatedNutrient(value=contribution, unit=record.unit)
            continue
        scaled[key] = AggregatedNutrient(
            value=existing.value + convert(contribution, record.unit, existing.unit),
            unit=existing.unit,
        )
    return scaled


def aggregate(
    entries: Iterable[PlateEntry], *, strict_units: bool = False
) -> NutrientTotals:
    """Sum every active entry's scaled nutrients by canonical key.

    The unit of a key is taken from the first entry reporting it. Later
    entries in another mass unit are converted into it; other mismatches
    raise UnitMismatchError when strict_units is set and are summed as
    reported otherwise.
    """
    by_key: dict[str, AggregatedNutrient] = {}
    per_item: list[ItemNutrients] = []
    for entry in entries:
        if not entry.active:
            continue
        scaled = _scaled_nutrients(entry)
        per_item.append(scaled)
        for key, nutrient in scaled.items():
            existing = by_key.get(key)
            if existing is None:
                by_key[key] = nutrient
                continue
            contribution = nutrient.value
            if is_convertible(nutrient.unit, existing.unit):
                contribution = convert(contribution, nutrient.unit, existing.unit)
            elif strict_units:
                msg = (
                    f"Nutrient {key!r} reported as {nutrient.unit!r} by "
                    f"{entry.item.id!r} but as {existing.unit!r} earlier"
                )
                raise UnitMismatchError(msg)
            else:
                _logger.warning(
                    "Unit mismatch for %s: %s vs %s (item=%s)",
                    key,
                    nutrient.unit,
                    existing.unit,
                    entry.item.id,
                )
            by_key[key] = AggregatedNutrient(
                value=existing.value + contribution, unit=existing.unit
            )
    return NutrientTotals(by_key=by_key, per_item=tuple(per_item))


def lookup(
    totals: NutrientTotals,
    names: Iterable[str],
    aggregation: Aggregation = Aggregation.FIRST,
) -> AggregatedNutrient | None:
    """Resolve a synonym list against aggregated totals.

    Each item contributes its first present synonym under FIRST, or every
    present synonym under SUM. Contributions are summed across items in the
    unit of the first one, converting mass units.
    """
    keys = [canonical_key(name) for name in names]
    unit: str | None = None
    total = 0.0
    for scaled in totals.per_item:
        present = [scaled[key] for key in keys if key in scaled]
        if aggregation is Aggregation.FIRST:
            present = present[:1]
        for nutrient in present:
            if unit is None:
                unit = nutrient.unit
            total += convert(nutrient.value, nutrient.unit, unit)
    if unit is None:
        return None
    return AggregatedNutrient(value=total, unit=unit)


def _value(totals: NutrientTotals, names: Iterable[str]) -> float:
    found = lookup(totals, names)
    return found.value if found else 0.0


def macro_total(
    totals: NutrientTotals, catalog: NutrientCatalog, macro: MacroType
) -> float:
    """Return the aggregated amount of a macro."""
    return _value(totals, catalog.names_for(macro))


def calories_total(totals: NutrientTotals, catalog: NutrientCatalog) -> float:
    """Return the aggregated calories of the plate."""
    return _value(totals, catalog.calorie_names)


def fiber_total(totals: NutrientTotals, catalog: NutrientCatalog) -> float:
    """Return the plate's fiber in grams, using each item's first positive name."""
    keys = [canonical_key(name) for name in catalog.fiber_names]
    total = 0.0
    for scaled in totals.per_item:
        for key in keys:
            found = scaled.get(key)
            if found is not None and found.value > 0:
                total += convert(found.value, found.unit, _FIBER_UNIT)
                break
    return total


def row_value(
    descriptor: NutrientRowDescriptor,
    totals: NutrientTotals,
    catalog: NutrientCatalog,
) -> float:
    """Return the displayed amount for a nutrient row."""
    source = descriptor.source
    if isinstance(source, MacroSource):
        return macro_total(totals, catalog, source.macro)
    if isinstance(source, NutrientSource):
        found = lookup(totals, source.names, source.aggregation)
        return found.value if found else 0.0
    if isinstance(source, ComputedSource):
        if source.computation is Computation.NET_CARBS:
            carbs = macro_total(totals, catalog, MacroType.CARBS)
            return max(carbs - fiber_total(totals, catalog), 0.0)
        return calories_total(totals, catalog)
    msg = f"Unsupported nutrient source: {source!r}"
    raise TypeError(msg)


def row_unit(descriptor: NutrientRowDescriptor, totals: NutrientTotals) -> str:
    """Return the unit a row's value is expressed in."""
    source = descriptor.source
    if isinstance(source, NutrientSource):
        found = lookup(totals, source.names, source.aggregation)
        if found is not None and found.unit.strip():
            return found.unit
    return descriptor.default_unit


def is_row_visible(descriptor: NutrientRowDescriptor, totals: NutrientTotals) -> bool:
    """Return whether a row has data to show.

    Macro and computed rows are always shown; nutrient rows only when at
    least one synonym was reported by an active item, even at zero.
    """
    source = descriptor.source
    if isinstance(source, NutrientSource):
        return any(canonical_key(name) in totals for name in source.names)
    return True
