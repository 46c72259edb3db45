"""Shared test fixtures."""

import pytest

from plate_nutrition.config import Settings
from plate_nutrition.containers import AppContainer, build_container
from plate_nutrition.domain.catalog import NutrientCatalog, default_catalog
from plate_nutrition.domain.foods import FoodItem, Measure, NutrientRecord
from plate_nutrition.domain.goals import DailyGoals


def make_food(
    item_id: str,
    nutrients: list[tuple[str, float, str]],
    measures: list[tuple[str, str, float | None]] | None = None,
    baseline_serving: float | None = 1.0,
    serving_unit: str | None = None,
) -> FoodItem:
    """Build a food item from compact tuples."""
    return FoodItem(
        id=item_id,
        display_name=item_id.title(),
        nutrients=tuple(
            NutrientRecord(raw_name=name, value=value, unit=unit)
            for name, value, unit in nutrients
        ),
        measures=tuple(
            Measure(id=measure_id, unit=unit, description=f"1 {unit}", gram_weight=w)
            for measure_id, unit, w in (measures or [])
        ),
        baseline_serving=baseline_serving,
        serving_unit=serving_unit,
    )


@pytest.fixture
def yogurt() -> FoodItem:
    """Cup-based item with a tablespoon alternative."""
    return make_food(
        "yogurt",
        [
            ("Sugars, Total", 10, "g"),
            ("Protein", 5, "g"),
            ("Energy", 150, "kcal"),
            ("Carbohydrate, by difference", 17, "g"),
            ("Total lipid (fat)", 4, "g"),
            ("Calcium, Ca", 300, "mg"),
        ],
        measures=[("cup", "cup", 240), ("tbsp", "tbsp", 15)],
        serving_unit="cup",
    )


@pytest.fixture
def chicken() -> FoodItem:
    """Unmeasured item that reports no sugar."""
    return make_food(
        "chicken",
        [
            ("protein", 8, "g"),
            ("energy", 60, "kcal"),
            ("Total lipid (fat)", 1, "g"),
            ("Cholesterol", 25, "mg"),
        ],
    )


@pytest.fixture
def catalog() -> NutrientCatalog:
    return default_catalog()


@pytest.fixture
def daily_goals() -> DailyGoals:
    return DailyGoals(calories=2000, protein=100, carbs=250, fat=70)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        default_calorie_goal=2000,
        default_protein_goal_g=100,
        default_carbs_goal_g=250,
        default_fat_goal_g=70,
        goals_push_token="goals-token",
        debug=False,
    )


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings)
