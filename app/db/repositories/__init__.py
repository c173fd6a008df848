"""Database repositories."""

from app.db.repositories.plan import PlanRepository

__all__ = [
    "PlanRepository",
]
