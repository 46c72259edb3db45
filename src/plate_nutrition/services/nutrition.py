"""Plate nutrition summaries for presentation surfaces."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from plate_nutrition.domain.catalog import (
    MacroType,
    NutrientCatalog,
    NutrientRowDescriptor,
    Section,
)
from plate_nutrition.domain.goals import DailyGoals, NutrientGoal
from plate_nutrition.services.aggregation import (
    NutrientTotals,
    calories_total,
    is_row_visible,
    macro_total,
    row_unit,
    row_value,
)
from plate_nutrition.services.goal_snapshots import GoalSnapshotStore
from plate_nutrition.services.goals import (
    percentage_of,
    progress_fraction,
    ratio_text,
    resolve_goal,
)
from plate_nutrition.services.plates import PlateSession

_logger = logging.getLogger(__name__)

_CALORIES_PER_GRAM = {
    MacroType.PROTEIN: 4.0,
    MacroType.CARBS: 4.0,
    MacroType.FAT: 9.0,
}


@dataclass(frozen=True)
class NutrientRowDisplay:
    """Display tuple for one nutrient row."""

    label: str
    slug: str | None
    value: float
    goal: float | None
    unit: str
    percentage_text: str
    progress: float
    ratio_text: str


@dataclass(frozen=True)
class MacroSummary:
    """Headline totals with each macro's share of macro calories."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    protein_share: float
    carbs_share: float
    fat_share: float


@dataclass(frozen=True)
class PlateSummary:
    """Macro headline plus nutrient rows grouped by section."""

    macros: MacroSummary
    sections: dict[Section, list[NutrientRowDisplay]]
    active_items: int


def build_row(
    descriptor: NutrientRowDescriptor,
    totals: NutrientTotals,
    catalog: NutrientCatalog,
    goals: Mapping[str, NutrientGoal],
    daily_goals: DailyGoals | None,
) -> NutrientRowDisplay:
    """Build the display tuple for a single row."""
    value = row_value(descriptor, totals, catalog)
    unit = row_unit(descriptor, totals)
    goal = resolve_goal(descriptor, goals, daily_goals, unit=unit)
    return NutrientRowDisplay(
        label=descriptor.label,
        slug=descriptor.slug,
        value=value,
        goal=goal,
        unit=unit,
        percentage_text=percentage_of(value, goal),
        progress=progress_fraction(value, goal),
        ratio_text=ratio_text(value, goal, unit),
    )


def build_rows(
    totals: NutrientTotals,
    catalog: NutrientCatalog,
    goals: Mapping[str, NutrientGoal],
    daily_goals: DailyGoals | None = None,
    section: Section | None = None,
) -> list[NutrientRowDisplay]:
    """Build display tuples for every visible row, optionally one section."""
    descriptors = catalog.rows if section is None else catalog.rows_in(section)
    return [
        build_row(descriptor, totals, catalog, goals, daily_goals)
        for descriptor in descriptors
        if is_row_visible(descriptor, totals)
    ]


def macro_summary(totals: NutrientTotals, catalog: NutrientCatalog) -> MacroSummary:
    """Summarize calories and macros with their calorie shares."""
    grams = {macro: macro_total(totals, catalog, macro) for macro in MacroType}
    energy = {macro: grams[macro] * _CALORIES_PER_GRAM[macro] for macro in MacroType}
    denominator = max(sum(energy.values()), 1.0)
    return MacroSummary(
        calories=calories_total(totals, catalog),
        protein_g=grams[MacroType.PROTEIN],
        carbs_g=grams[MacroType.CARBS],
        fat_g=grams[MacroType.FAT],
        protein_share=energy[MacroType.PROTEIN] / denominator,
        carbs_share=energy[MacroType.CARBS] / denominator,
        fat_share=energy[MacroType.FAT] / denominator,
    )


@dataclass
class PlateSummaryService:
    """Builds plate summaries against the current goal snapshot."""

    catalog: NutrientCatalog
    goal_store: GoalSnapshotStore
    debug: bool = False

    def summarize(self, session: PlateSession) -> PlateSummary:
        """Aggregate a session and format every visible nutrient row."""
        totals = session.totals()
        snapshot = self.goal_store.current()
        sections: dict[Section, list[NutrientRowDisplay]] = {}
        for section in Section:
            rows = build_rows(
                totals, self.catalog, snapshot.goals, snapshot.daily, section
            )
            if rows:
                sections[section] = rows
        summary = PlateSummary(
            macros=macro_summary(totals, self.catalog),
            sections=sections,
            active_items=len(session.active_entries()),
        )
        if self.debug:
            _logger.info(
                "Plate summary: items=%s nutrients=%s",
                summary.active_items,
                len(totals),
            )
        return summary
