"""Tests for application settings."""

import pytest

from plate_nutrition.config import Settings
from plate_nutrition.domain.goals import DailyGoals


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEFAULT_CALORIE_GOAL", "1800")
    monkeypatch.setenv("STRICT_UNIT_RECONCILIATION", "true")
    monkeypatch.setenv("GOALS_PUSH_TOKEN", "secret")

    settings = Settings(_env_file=None)

    assert settings.default_calorie_goal == 1800
    assert settings.strict_unit_reconciliation is True
    assert settings.goals_push_token == "secret"


def test_daily_goals_use_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "DEFAULT_CALORIE_GOAL",
        "DEFAULT_PROTEIN_GOAL_G",
        "DEFAULT_CARBS_GOAL_G",
        "DEFAULT_FAT_GOAL_G",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.daily_goals() == DailyGoals(
        calories=2000, protein=150, carbs=200, fat=65
    )
