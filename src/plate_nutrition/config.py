"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from plate_nutrition.domain.goals import DailyGoals

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    default_calorie_goal: float = 2000
    default_protein_goal_g: float = 150
    default_carbs_goal_g: float = 200
    default_fat_goal_g: float = 65
    strict_unit_reconciliation: bool = False
    goals_push_token: str | None = None
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def daily_goals(self) -> DailyGoals:
        """Return the fallback daily goals."""
        return DailyGoals(
            calories=self.default_calorie_goal,
            protein=self.default_protein_goal_g,
            carbs=self.default_carbs_goal_g,
            fat=self.default_fat_goal_g,
        )
