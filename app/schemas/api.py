"""
Request / response payloads of the HTTP API.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.intake import HealthProfile, Intake, UserState
from app.schemas.plan import HealthSummary, Plan


class PlanRequest(BaseModel):
    """Everything needed to generate a plan."""

    intake: Intake = Field(default_factory=Intake)
    user_state: Optional[UserState] = None
    health_profile: Optional[HealthProfile] = None
    start_date: Optional[datetime.date] = Field(
        None, description="Day 1 of the plan (defaults to today)",
    )


class SavedPlanSummary(BaseModel):
    id: int
    user_name: str
    primary_goal: Optional[str] = None
    start_date: datetime.date
    created_at: datetime.datetime


class SavedPlanResponse(SavedPlanSummary):
    plan: Plan
    text: str


class HealthConstraintsResponse(BaseModel):
    """How a health profile restricts the built-in task library."""

    intensity_cap: Optional[int] = Field(
        None, description="0 = gentle only, 1 = moderate max, None = no cap",
    )
    warnings: list[str]
    summary: Optional[HealthSummary] = None
    excluded_task_ids: list[str]
