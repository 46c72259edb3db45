"""Domain models for daily nutrition goals."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutrientGoal:
    """Goal catalog entry for a single nutrient slug."""

    slug: str
    unit: str
    target: float | None = None
    max: float | None = None
    ideal_max: float | None = None


@dataclass(frozen=True)
class DailyGoals:
    """Daily calorie and macro goals used when the catalog has no entry."""

    calories: float
    protein: float
    carbs: float
    fat: float


GoalCatalog = dict[str, NutrientGoal]
