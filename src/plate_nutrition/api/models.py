"""Pydantic models for plate summary and goal snapshot payloads."""

from pydantic import BaseModel, Field

from plate_nutrition.domain.foods import FoodItem, Measure, NutrientRecord
from plate_nutrition.domain.goals import DailyGoals, NutrientGoal


class NutrientPayload(BaseModel):
    """Raw nutrient measurement for one baseline serving."""

    name: str
    value: float = Field(default=0, ge=0)
    unit: str = ""


class MeasurePayload(BaseModel):
    """Selectable serving measure."""

    id: str
    unit: str
    description: str = ""
    gram_weight: float | None = None


class FoodItemPayload(BaseModel):
    """Food item as provided by search, scan or manual entry."""

    id: str
    display_name: str
    nutrients: list[NutrientPayload] = Field(default_factory=list)
    measures: list[MeasurePayload] = Field(default_factory=list)
    baseline_serving: float | None = None
    serving_unit: str | None = None

    def to_domain(self) -> FoodItem:
        """Convert into the domain model, dropping non-positive measure weights."""
        return FoodItem(
            id=self.id,
            display_name=self.display_name,
            nutrients=tuple(
                NutrientRecord(raw_name=n.name, value=n.value, unit=n.unit)
                for n in self.nutrients
            ),
            measures=tuple(
                Measure(
                    id=m.id,
                    unit=m.unit,
                    description=m.description,
                    gram_weight=m.gram_weight,
                )
                for m in self.measures
                if m.gram_weight is None or m.gram_weight > 0
            ),
            baseline_serving=self.baseline_serving,
            serving_unit=self.serving_unit,
        )


class ServingEditPayload(BaseModel):
    """User edit applied to one item before summarizing."""

    item_id: str
    serving_text: str | None = None
    serving_amount: float | None = None
    measure_id: str | None = None
    deleted: bool = False


class PlateSummaryRequest(BaseModel):
    """Items on the plate and the edits made to them."""

    items: list[FoodItemPayload]
    edits: list[ServingEditPayload] = Field(default_factory=list)


class NutrientGoalPayload(BaseModel):
    """Goal catalog entry."""

    unit: str = ""
    target: float | None = None
    max: float | None = None
    ideal_max: float | None = None


class GoalSnapshotPayload(BaseModel):
    """Whole goal snapshot pushed by the nutrition-goals service."""

    calories: float
    protein: float
    carbs: float
    fat: float
    nutrients: dict[str, NutrientGoalPayload] = Field(default_factory=dict)

    def to_domain(self) -> tuple[dict[str, NutrientGoal], DailyGoals]:
        """Convert into a goal catalog and daily goals."""
        goals = {
            slug: NutrientGoal(
                slug=slug,
                unit=entry.unit,
                target=entry.target,
                max=entry.max,
                ideal_max=entry.ideal_max,
            )
            for slug, entry in self.nutrients.items()
        }
        daily = DailyGoals(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
        )
        return goals, daily
