"""
Saved plan repository.

Handles database operations for :class:`SavedPlan`.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.plan import SavedPlan


class PlanRepository:
    """Repository for SavedPlan database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: SavedPlan) -> SavedPlan:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def get_by_id(self, plan_id: int) -> Optional[SavedPlan]:
        return self.session.get(SavedPlan, plan_id)

    def list_recent(self, limit: int = 20) -> list[SavedPlan]:
        statement = select(SavedPlan).order_by(SavedPlan.id.desc()).limit(limit)
        return list(self.session.exec(statement).all())
