"""Daily goal resolution and percentage-of-goal formatting."""

import math
from collections.abc import Mapping

from plate_nutrition.domain.catalog import (
    Computation,
    ComputedSource,
    MacroSource,
    MacroType,
    NutrientRowDescriptor,
)
from plate_nutrition.domain.goals import DailyGoals, NutrientGoal
from plate_nutrition.services.units import convert

EMPTY_GOAL_TEXT = "--"


def catalog_goal(entry: NutrientGoal) -> float | None:
    """Return the first positive of target, max and ideal max."""
    for candidate in (entry.target, entry.max, entry.ideal_max):
        if candidate is not None and candidate > 0:
            return candidate
    return None


def _fallback_goal(
    descriptor: NutrientRowDescriptor, daily_goals: DailyGoals | None
) -> float | None:
    if daily_goals is None:
        return None
    source = descriptor.source
    value: float | None = None
    if isinstance(source, MacroSource):
        value = {
            MacroType.PROTEIN: daily_goals.protein,
            MacroType.CARBS: daily_goals.carbs,
            MacroType.FAT: daily_goals.fat,
        }[source.macro]
    elif (
        isinstance(source, ComputedSource)
        and source.computation is Computation.CALORIES
    ):
        value = daily_goals.calories
    if value is None or value <= 0:
        return None
    return value


def resolve_goal(
    descriptor: NutrientRowDescriptor,
    goal_catalog: Mapping[str, NutrientGoal],
    daily_goals: DailyGoals | None = None,
    unit: str | None = None,
) -> float | None:
    """Resolve a row's daily goal, expressed in the requested unit.

    The catalog entry for the row's slug wins when it carries a positive
    target, max or ideal max. Otherwise macro and calorie rows fall back to
    the daily goals; every other row has no goal.
    """
    target_unit = unit or descriptor.default_unit
    entry = goal_catalog.get(descriptor.slug) if descriptor.slug else None
    if entry is not None:
        value = catalog_goal(entry)
        if value is not None:
            return convert(value, entry.unit or descriptor.default_unit, target_unit)

    fallback = _fallback_goal(descriptor, daily_goals)
    if fallback is None:
        return None
    return convert(fallback, descriptor.default_unit, target_unit)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def percentage_of(value: float, goal: float | None) -> str:
    """Format a value as a whole percentage of its goal."""
    if goal is None or goal <= 0:
        return EMPTY_GOAL_TEXT
    return f"{_round_half_away(value / goal * 100)}%"


def progress_fraction(value: float, goal: float | None) -> float:
    """Return the share of the goal reached, clamped to [0, 1]."""
    if goal is None or goal <= 0:
        return 0.0
    return min(max(value / goal, 0.0), 1.0)


def format_amount(value: float) -> str:
    """Format an amount with at most one decimal."""
    rounded = round(value, 1)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.1f}"


def ratio_text(value: float, goal: float | None, unit: str) -> str:
    """Format "value/goal unit", using "--" for a missing goal."""
    goal_text = format_amount(goal) if goal is not None else EMPTY_GOAL_TEXT
    text = f"{format_amount(value)}/{goal_text}"
    trimmed = unit.strip()
    return f"{text} {trimmed}" if trimmed else text
