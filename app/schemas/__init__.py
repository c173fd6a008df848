"""Pydantic schemas for plan inputs, outputs and request/response validation."""

from app.schemas.task import Equipment, Intensity, Level, Phase, Pillar, Slot, Task
from app.schemas.intake import HealthProfile, Intake, UserState
from app.schemas.plan import (
    AssignedTask,
    BlueprintResult,
    ComputedMeta,
    HealthAdaptation,
    HealthSummary,
    IntensityCaps,
    Plan,
    PlanDay,
    PlanMeta,
)
from app.schemas.api import (
    HealthConstraintsResponse,
    PlanRequest,
    SavedPlanResponse,
    SavedPlanSummary,
)

__all__ = [
    "Equipment",
    "Intensity",
    "Level",
    "Phase",
    "Pillar",
    "Slot",
    "Task",
    "HealthProfile",
    "Intake",
    "UserState",
    "AssignedTask",
    "BlueprintResult",
    "ComputedMeta",
    "HealthAdaptation",
    "HealthSummary",
    "IntensityCaps",
    "Plan",
    "PlanDay",
    "PlanMeta",
    "HealthConstraintsResponse",
    "PlanRequest",
    "SavedPlanResponse",
    "SavedPlanSummary",
]
