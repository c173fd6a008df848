"""
30-day plan output schemas.

A :class:`Plan` is produced once per generation run and owned by the
caller afterwards.  It carries the computed metadata (needs, adherence,
caps, mastery, health adaptation) and exactly 30 :class:`PlanDay`
records, each holding 0-3 :class:`AssignedTask` entries.

Plans deliberately contain no wall-clock timestamps: two runs with the
same inputs and the same ``start_date`` serialise identically.
"""

from __future__ import annotations

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.intake import Intake
from app.schemas.task import Intensity, Level, Phase, Pillar, Slot


class IntensityCaps(BaseModel):
    """Global intensity rules derived from intake, energy and health."""

    global_mod: int = Field(
        ..., description="Shift applied to the +1 ceiling (-2..+1)",
    )
    movement_cap: int = Field(
        ..., description="Ceiling for movement_muscle tasks (0 for age >= 56)",
    )
    hiit_banned: bool = Field(
        ..., description="HIIT-tagged tasks are excluded entirely",
    )


class HealthSummary(BaseModel):
    """Short health overview for plan display."""

    condition_count: int
    injury_count: int
    intensity_level: str = Field(..., description="One of: gentle, moderate, normal")
    has_restrictions: bool
    warnings: list[str]


class HealthAdaptation(BaseModel):
    """How the health profile shaped the plan."""

    has_profile: bool
    warnings: list[str] = Field(default_factory=list)
    summary: Optional[HealthSummary] = None
    intensity_cap: Optional[int] = Field(
        None, description="0 = gentle only, 1 = moderate max, None = no cap",
    )
    tasks_filtered: int = Field(0, description="Library tasks removed by the profile")


class ComputedMeta(BaseModel):
    """Values computed from the inputs before the day loop."""

    needs: dict[Pillar, float]
    adherence: float = Field(..., ge=0.2, le=1.0)
    caps: IntensityCaps
    user_mastery_levels: dict[Pillar, Level]
    difficulty_adjustment: float
    energy_level: int


class PlanMeta(BaseModel):
    version: str
    inputs: Intake
    computed: ComputedMeta
    health: HealthAdaptation


class AssignedTask(BaseModel):
    """A library task placed on a specific day and slot."""

    id: str = Field(..., description="Plan-unique id: d{day}_t{n}_{task_id}")
    task_id: str
    pillar: str = Field(..., description="Short pillar label for display grouping")
    raw_pillar: Pillar
    slot: str = Field(..., description="am, any, pm or fallback")
    when: Slot
    task: str = Field(..., description="Instruction text")
    title: Optional[str] = None
    time_minutes: int
    level: Level
    intensity: Intensity
    freshness: float = Field(
        ..., ge=0.0, le=1.0,
        description="Freshness multiplier the task was selected under",
    )


class PlanDay(BaseModel):
    day: int = Field(..., ge=1, le=30)
    date: datetime.date
    phase: Phase
    day_of_week: str
    day_type: str
    season: str
    is_novelty_day: bool
    novelty_pillar: Optional[Pillar] = None
    theme: str
    time_budget_minutes: int = Field(..., description="Adjusted, clamped budget for this day")
    total_time_minutes: int
    used_fallback: bool = False
    tasks: list[AssignedTask] = Field(default_factory=list)


class Plan(BaseModel):
    user_name: str
    plan_summary: str
    start_date: datetime.date
    generation_method: str = "algorithm"
    primary_focus_pillars: list[str]
    meta: PlanMeta
    days: list[PlanDay]


class BlueprintResult(BaseModel):
    """Return value of a plan-generation run."""

    plan: Plan
    text: str = Field(..., description="Human-readable rendering of the plan")
