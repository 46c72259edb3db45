"""Tests for goal resolution and percentage formatting."""

import pytest

from plate_nutrition.domain.goals import DailyGoals, NutrientGoal
from plate_nutrition.services.goals import (
    catalog_goal,
    percentage_of,
    progress_fraction,
    ratio_text,
    resolve_goal,
)


def test_catalog_goal_priority() -> None:
    assert catalog_goal(NutrientGoal("iron", "mg", target=18, max=45)) == 18
    assert catalog_goal(NutrientGoal("sodium", "mg", target=0, max=2300)) == 2300
    assert catalog_goal(NutrientGoal("sugars", "g", ideal_max=36)) == 36
    assert catalog_goal(NutrientGoal("water", "ml")) is None


def test_resolve_goal_converts_to_display_unit(catalog) -> None:
    copper = catalog.descriptor("copper")
    goals = {"copper": NutrientGoal("copper", "mg", target=0.9)}

    assert resolve_goal(copper, goals) == pytest.approx(900)
    assert resolve_goal(copper, goals, unit="mg") == pytest.approx(0.9)


def test_resolve_goal_passes_through_non_mass_units(catalog) -> None:
    vitamin_d = catalog.descriptor("vitamin_d")
    goals = {"vitamin_d": NutrientGoal("vitamin_d", "IU", target=600)}
    assert resolve_goal(vitamin_d, goals) == 600


def test_macro_and_calorie_rows_fall_back_to_daily_goals(catalog) -> None:
    daily = DailyGoals(calories=2200, protein=120, carbs=250, fat=70)

    assert resolve_goal(catalog.descriptor("protein"), {}, daily) == 120
    assert resolve_goal(catalog.descriptor("carbs"), {}, daily) == 250
    assert resolve_goal(catalog.descriptor("fat"), {}, daily) == 70
    assert resolve_goal(catalog.descriptor("calories"), {}, daily) == 2200


def test_catalog_entry_wins_over_daily_goals(catalog) -> None:
    daily = DailyGoals(calories=2200, protein=120, carbs=250, fat=70)
    goals = {"protein": NutrientGoal("protein", "g", target=140)}
    assert resolve_goal(catalog.descriptor("protein"), goals, daily) == 140


def test_non_positive_fallback_resolves_to_none(catalog) -> None:
    daily = DailyGoals(calories=0, protein=120, carbs=250, fat=70)
    assert resolve_goal(catalog.descriptor("calories"), {}, daily) is None


def test_micronutrients_without_entry_have_no_goal(catalog) -> None:
    daily = DailyGoals(calories=2200, protein=120, carbs=250, fat=70)

    assert resolve_goal(catalog.descriptor("iron"), {}, daily) is None
    assert resolve_goal(catalog.descriptor("net_carbs"), {}, daily) is None
    net_goal = {"net_carbs": NutrientGoal("net_carbs", "g", target=100)}
    assert resolve_goal(catalog.descriptor("net_carbs"), net_goal, daily) == 100


def test_percentage_and_progress() -> None:
    assert percentage_of(50, 200) == "25%"
    assert progress_fraction(50, 200) == 0.25
    assert percentage_of(50, 0) == "--"
    assert progress_fraction(50, 0) == 0
    assert percentage_of(50, None) == "--"
    assert progress_fraction(50, None) == 0


def test_percentage_rounds_half_up_and_progress_clamps() -> None:
    assert percentage_of(1, 8) == "13%"
    assert percentage_of(5, 200) == "3%"
    assert percentage_of(300, 200) == "150%"
    assert progress_fraction(300, 200) == 1.0
    assert progress_fraction(-5, 200) == 0.0


def test_ratio_text() -> None:
    assert ratio_text(12, 50, "g") == "12/50 g"
    assert ratio_text(1.25, None, "mg") == "1.2/-- mg"
    assert ratio_text(3, 10, " ") == "3/10"
