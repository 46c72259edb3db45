"""Domain models for food items and their serving measures."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutrientRecord:
    """Raw nutrient measurement for one baseline serving."""

    raw_name: str
    value: float
    unit: str


@dataclass(frozen=True)
class Measure:
    """Selectable serving representation for a food item."""

    id: str
    unit: str
    description: str
    gram_weight: float | None = None

    @property
    def has_weight(self) -> bool:
        """Return whether the measure carries a usable gram weight."""
        return self.gram_weight is not None and self.gram_weight > 0


def find_measure(
    measures: tuple[Measure, ...], measure_id: str | None
) -> Measure | None:
    """Return the measure with the given id from a measure list."""
    if measure_id is None:
        return None
    for measure in measures:
        if measure.id == measure_id:
            return measure
    return None


@dataclass(frozen=True)
class FoodItem:
    """Food item with raw nutrients defined against a baseline serving."""

    id: str
    display_name: str
    nutrients: tuple[NutrientRecord, ...] = ()
    measures: tuple[Measure, ...] = ()
    baseline_serving: float | None = None
    serving_unit: str | None = None

    def measure(self, measure_id: str | None) -> Measure | None:
        """Return the measure with the given id, if the item has it."""
        return find_measure(self.measures, measure_id)


@dataclass
class ServingEditState:
    """Mutable serving edits for one item in a plate session."""

    serving_amount: float
    raw_input_text: str
    baseline_serving: float
    selected_measure_id: str | None = None
    baseline_measure_id: str | None = None


@dataclass(frozen=True)
class PlateEntry:
    """Food item paired with its edit state and active flag."""

    item: FoodItem
    state: ServingEditState
    active: bool = True
