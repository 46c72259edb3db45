"""Serving edits: amount parsing, measure resolution and scaling factors."""

import math
import re

from plate_nutrition.domain.foods import (
    FoodItem,
    Measure,
    ServingEditState,
    find_measure,
)

DEFAULT_BASELINE_SERVING = 1.0
UNMEASURED_UNIT = "serving"

_FRACTION_RE = re.compile(r"^(?:(\d+)\s+)?(\d+)\s*/\s*(\d+)$")

_UNIT_TOKENS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("cup", ("cup", "cups")),
    (
        "serving",
        (
            "serving",
            "servings",
            "portion",
            "tray",
            "plate",
            "meal",
            "container",
            "box",
            "pack",
            "package",
            "dip",
        ),
    ),
    (
        "piece",
        (
            "piece",
            "pieces",
            "roll",
            "rolls",
            "slice",
            "slices",
            "stick",
            "sticks",
            "item",
            "items",
            "ball",
            "balls",
        ),
    ),
    ("egg", ("egg", "eggs")),
    ("tbsp", ("tbsp", "tablespoon", "tablespoons")),
    ("tsp", ("tsp", "teaspoon", "teaspoons")),
    ("g", ("g", "gram", "grams")),
    ("oz", ("oz", "ounce", "ounces")),
    ("lb", ("lb", "lbs", "pound", "pounds")),
    ("ml", ("ml", "milliliter", "milliliters")),
)


class InvalidServingError(ValueError):
    """Raised when a serving amount or baseline violates its preconditions."""


def parse_serving(text: str | None) -> float | None:
    """Parse a serving amount from user input.

    Accepts plain decimals ("1.5"), fractions ("1/2") and mixed numbers
    ("1 1/2"). Returns None for empty, malformed, non-finite or
    non-positive input so the caller can keep its previous amount.
    """
    if text is None:
        return None
    cleaned = text.strip()
    if not cleaned:
        return None
    match = _FRACTION_RE.match(cleaned)
    if match:
        whole, numerator, denominator = match.groups()
        if int(denominator) == 0:
            return None
        value = int(numerator) / int(denominator)
        if whole:
            value += int(whole)
    else:
        try:
            value = float(cleaned)
        except ValueError:
            return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def format_serving(amount: float) -> str:
    """Format a serving amount, dropping the fraction when it is whole."""
    if amount == int(amount):
        return str(int(amount))
    return f"{amount:.2f}".rstrip("0").rstrip(".")


def canonical_unit_label(raw_unit: str) -> str:
    """Map a free-form serving unit onto a short canonical label."""
    lower = raw_unit.lower()
    words = set(re.findall(r"[a-z]+", lower))
    for canonical, tokens in _UNIT_TOKENS:
        if words.intersection(tokens):
            return canonical
    return raw_unit.strip()


def matching_baseline_measure(
    serving_unit: str | None, measures: tuple[Measure, ...]
) -> Measure | None:
    """Return the measure whose unit matches the item's reported serving unit."""
    if not serving_unit or not serving_unit.strip():
        return None
    target = canonical_unit_label(serving_unit)
    for measure in measures:
        if canonical_unit_label(measure.unit) == target:
            return measure
    return None


def validate_baseline(item: FoodItem) -> float:
    """Return an item's baseline serving.

    A missing baseline defaults to one serving. A non-positive or non-finite
    baseline raises InvalidServingError.
    """
    baseline = item.baseline_serving
    if baseline is None:
        return DEFAULT_BASELINE_SERVING
    if not math.isfinite(baseline) or baseline <= 0:
        msg = f"Baseline serving for {item.id!r} must be positive, got {baseline!r}"
        raise InvalidServingError(msg)
    return baseline


def new_edit_state(item: FoodItem) -> ServingEditState:
    """Create the initial edit state for an item."""
    baseline = validate_baseline(item)
    baseline_measure = matching_baseline_measure(item.serving_unit, item.measures)
    baseline_measure_id = baseline_measure.id if baseline_measure else None
    selected_id = baseline_measure_id
    if selected_id is None and item.measures:
        selected_id = item.measures[0].id
    return ServingEditState(
        serving_amount=baseline,
        raw_input_text=format_serving(baseline),
        baseline_serving=baseline,
        selected_measure_id=selected_id,
        baseline_measure_id=baseline_measure_id,
    )


def baseline_measure(
    state: ServingEditState, measures: tuple[Measure, ...]
) -> Measure | None:
    """Return the measure the raw nutrient values are defined against."""
    return find_measure(measures, state.baseline_measure_id)


def resolve_measure(
    state: ServingEditState, measures: tuple[Measure, ...]
) -> Measure | None:
    """Return the measure currently in effect for an edit state.

    Order: the selected measure, then the baseline measure, then the first
    measure. None means the item is served in plain "serving" units.
    """
    selected = find_measure(measures, state.selected_measure_id)
    if selected is not None:
        return selected
    baseline = find_measure(measures, state.baseline_measure_id)
    if baseline is not None:
        return baseline
    return measures[0] if measures else None


def scaling_factor(state: ServingEditState, measures: tuple[Measure, ...]) -> float:
    """Return the multiplier applied to an item's baseline nutrient values."""
    baseline = baseline_measure(state, measures)
    selected = resolve_measure(state, measures)
    if (
        baseline is not None
        and selected is not None
        and baseline.has_weight
        and selected.has_weight
    ):
        return (state.serving_amount * selected.gram_weight) / (
            state.baseline_serving * baseline.gram_weight
        )
    return state.serving_amount / state.baseline_serving


def serving_weight_grams(
    state: ServingEditState, measures: tuple[Measure, ...]
) -> float | None:
    """Return the weight in grams represented by the current edit, if known."""
    selected = resolve_measure(state, measures)
    if selected is not None and selected.has_weight:
        return selected.gram_weight * state.serving_amount
    for measure in measures:
        if canonical_unit_label(measure.unit) == "g" and measure.has_weight:
            return measure.gram_weight * state.serving_amount
    return None


def serving_description(
    state: ServingEditState, measures: tuple[Measure, ...]
) -> str:
    """Return a short label such as "1.5 cup" for the current edit."""
    selected = resolve_measure(state, measures)
    unit = selected.unit if selected is not None else UNMEASURED_UNIT
    amount = format_serving(state.serving_amount)
    unit = unit.strip()
    return f"{amount} {unit}" if unit else amount
