"""
Plan-generation inputs: intake questionnaire, health profile, user state.

All three are read-only for the duration of a plan-generation run.  Missing
optional answers fall back to documented defaults instead of failing, so a
partially filled questionnaire still produces a plan.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from app.schemas.task import Pillar

DEFAULT_TIME_BUDGET_MINUTES = 20

_LEADING_INT = re.compile(r"^\s*(\d+)")


class Intake(BaseModel):
    """Answers to the onboarding questionnaire."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field("You", description="Display name only")
    age: int = Field(35, ge=0, le=120)
    primary_goal: Optional[str] = Field(
        None,
        description="sleep, stress, energy, fat_loss, strength_fitness or focus_clarity",
    )
    sleep_hours_bucket: Optional[str] = Field(
        None, description="One of: <6, 6-6.5, 6.5-7, 7-7.5, 7.5-8, >8",
    )
    stress_1_10: int = Field(5, description="Self-reported stress, 1 (low) to 10 (high)")
    training_frequency: Optional[str] = Field(
        None, description="Sessions per week bucket: 0, 1-2, 3-4, 5+",
    )
    diet_pattern: list[str] = Field(default_factory=list)
    daily_time_budget: Optional[str] = Field(
        str(DEFAULT_TIME_BUDGET_MINUTES),
        description="String-encoded integer minutes per day, e.g. '20'",
    )
    equipment_access: Optional[str] = Field("none", description="none, basic or gym")

    @field_validator("name", "age", "stress_1_10", "diet_pattern", mode="before")
    @classmethod
    def _null_reads_as_default(cls, value, info: ValidationInfo):
        """An explicit null answer is treated like a missing one."""
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value

    @property
    def time_budget_minutes(self) -> int:
        """Daily time budget in minutes.

        Parsed from the leading digits of ``daily_time_budget`` ("15-30"
        reads as 15).  Missing or unparseable values read as the default.
        """
        if not self.daily_time_budget:
            return DEFAULT_TIME_BUDGET_MINUTES
        match = _LEADING_INT.match(self.daily_time_budget)
        if not match or int(match.group(1)) == 0:
            return DEFAULT_TIME_BUDGET_MINUTES
        return int(match.group(1))


class HealthProfile(BaseModel):
    """Optional medical context used to constrain the task library."""

    model_config = ConfigDict(extra="ignore")

    chronic_conditions: list[str] = Field(default_factory=list)
    injuries_limitations: list[str] = Field(default_factory=list)
    is_smoker: bool = False
    smoking_frequency: Optional[str] = None
    alcohol_frequency: Optional[str] = None
    mental_health_flags: list[str] = Field(default_factory=list)
    stress_level: int = Field(5, description="1-10, from the health questionnaire")
    takes_medications: bool = False

    @property
    def smokes(self) -> bool:
        return self.is_smoker or self.smoking_frequency == "daily"

    @property
    def drinks_daily(self) -> bool:
        return self.alcohol_frequency == "daily"


class UserState(BaseModel):
    """Returning-user context (empty for a first plan)."""

    model_config = ConfigDict(extra="ignore")

    completed_tasks: list[str] = Field(
        default_factory=list,
        description="Ids of every task the user has ever completed",
    )
    user_completions: dict[Pillar, int] = Field(
        default_factory=dict,
        description="Completed-task count per pillar",
    )
    completion_rate_7day: Optional[float] = Field(
        None, ge=0.0, le=1.0,
        description="Trailing 7-day completion rate (None if unknown)",
    )
    energy_level: int = Field(3, description="1 (exhausted) to 5 (energised)")
