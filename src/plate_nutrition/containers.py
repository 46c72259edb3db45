"""Dependency container wiring for the application."""

from dataclasses import dataclass

from plate_nutrition.config import Settings
from plate_nutrition.domain.catalog import NutrientCatalog, default_catalog
from plate_nutrition.services.goal_snapshots import (
    GoalSnapshotStore,
    InMemoryGoalSnapshotStore,
)
from plate_nutrition.services.nutrition import PlateSummaryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog: NutrientCatalog
    goal_store: GoalSnapshotStore
    summary_service: PlateSummaryService


def build_container(
    settings: Settings | None = None, catalog: NutrientCatalog | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_catalog = catalog or default_catalog()
    goal_store = InMemoryGoalSnapshotStore(
        daily=resolved_settings.daily_goals(),
        debug=resolved_settings.debug,
    )
    summary_service = PlateSummaryService(
        catalog=resolved_catalog,
        goal_store=goal_store,
        debug=resolved_settings.debug,
    )
    return AppContainer(
        settings=resolved_settings,
        catalog=resolved_catalog,
        goal_store=goal_store,
        summary_service=summary_service,
    )
