"""SQLModel database models."""

from app.models.plan import SavedPlan

__all__ = [
    "SavedPlan",
]
