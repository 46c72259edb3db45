"""Holders for the goal catalog pushed by the nutrition-goals service."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Protocol

from plate_nutrition.domain.goals import DailyGoals, NutrientGoal

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoalSnapshot:
    """Complete, read-only view of a user's goals at one point in time."""

    goals: MappingProxyType[str, NutrientGoal]
    daily: DailyGoals
    received_at: datetime | None = None


class GoalSnapshotStore(Protocol):
    """Source of the current goal snapshot."""

    def current(self) -> GoalSnapshot:
        """Return the latest complete snapshot."""

    def replace(self, goals: dict[str, NutrientGoal], daily: DailyGoals) -> None:
        """Swap in a new snapshot as a whole."""


@dataclass
class InMemoryGoalSnapshotStore(GoalSnapshotStore):
    """Process-local snapshot store.

    Readers always see either the previous or the new snapshot, never a mix,
    because replacement rebinds a single attribute.
    """

    _snapshot: GoalSnapshot
    debug: bool = False

    def __init__(self, daily: DailyGoals, debug: bool = False) -> None:
        self._snapshot = GoalSnapshot(goals=MappingProxyType({}), daily=daily)
        self.debug = debug

    def current(self) -> GoalSnapshot:
        """Return the latest complete snapshot."""
        return self._snapshot

    def replace(self, goals: dict[str, NutrientGoal], daily: DailyGoals) -> None:
        """Swap in a new snapshot as a whole."""
        self._snapshot = GoalSnapshot(
            goals=MappingProxyType(dict(goals)),
            daily=daily,
            received_at=datetime.now(tz=UTC),
        )
        if self.debug:
            _logger.info("Goal snapshot replaced: nutrients=%s", len(goals))
