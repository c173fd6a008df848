"""
Plan service.

Runs the plan-generation core against the built-in task library and
stores the result.  Generation itself is pure; persistence is the only
side effect and lives here.
"""

import logging

from fastapi import HTTPException, status
from sqlmodel import Session

from app.blueprint import build_30_day_blueprint
from app.catalog import all_tasks
from app.core.config import settings
from app.db.repositories.plan import PlanRepository
from app.models.plan import SavedPlan
from app.schemas.api import PlanRequest, SavedPlanResponse, SavedPlanSummary
from app.schemas.plan import BlueprintResult, Plan

logger = logging.getLogger(__name__)


class PlanService:
    """Service for plan generation and storage."""

    def __init__(self, session: Session):
        self.repository = PlanRepository(session)

    @staticmethod
    def generate(request: PlanRequest) -> BlueprintResult:
        return build_30_day_blueprint(
            request.intake,
            all_tasks(),
            user_state=request.user_state,
            health_profile=request.health_profile,
            start_date=request.start_date,
        )

    def create(self, request: PlanRequest) -> SavedPlanResponse:
        result = self.generate(request)
        entry = SavedPlan(
            user_name=result.plan.user_name,
            primary_goal=request.intake.primary_goal,
            start_date=result.plan.start_date,
            plan=result.plan.model_dump(mode="json"),
            rendered_text=result.text,
        )
        entry = self.repository.create(entry)
        logger.info("Saved plan %s for %s starting %s", entry.id, entry.user_name, entry.start_date)
        return self._to_response(entry)

    def get_by_id(self, plan_id: int) -> SavedPlanResponse:
        return self._to_response(self._get_entry(plan_id))

    def get_text(self, plan_id: int) -> str:
        return self._get_entry(plan_id).rendered_text

    def list_recent(self, limit: int = settings.RECENT_PLANS_LIMIT) -> list[SavedPlanSummary]:
        return [self._to_summary(e) for e in self.repository.list_recent(limit)]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _get_entry(self, plan_id: int) -> SavedPlan:
        entry = self.repository.get_by_id(plan_id)
        if not entry:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Plan {plan_id} not found")
        return entry

    @staticmethod
    def _to_summary(entry: SavedPlan) -> SavedPlanSummary:
        return SavedPlanSummary(
            id=entry.id,
            user_name=entry.user_name,
            primary_goal=entry.primary_goal,
            start_date=entry.start_date,
            created_at=entry.created_at,
        )

    @staticmethod
    def _to_response(entry: SavedPlan) -> SavedPlanResponse:
        return SavedPlanResponse(
            id=entry.id,
            user_name=entry.user_name,
            primary_goal=entry.primary_goal,
            start_date=entry.start_date,
            created_at=entry.created_at,
            plan=Plan.model_validate(entry.plan),
            text=entry.rendered_text,
        )
