"""
Plan endpoints.

Generate, store and retrieve 30-day plans.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from sqlmodel import Session

from app.db.session import get_db
from app.schemas.api import PlanRequest, SavedPlanResponse, SavedPlanSummary
from app.schemas.plan import BlueprintResult
from app.services.plan_service import PlanService

router = APIRouter()


@router.post("", summary="Generate and store a 30-day plan.", response_model=SavedPlanResponse,
             status_code=status.HTTP_201_CREATED, )
def create_plan(data: PlanRequest, db: Session = Depends(get_db), ):
    service = PlanService(db)
    return service.create(data)


@router.post("/preview", summary="Generate a 30-day plan without storing it.", response_model=BlueprintResult, )
def preview_plan(data: PlanRequest):
    return PlanService.generate(data)


@router.get("", summary="List recently generated plans.", response_model=list[SavedPlanSummary], )
def list_plans(db: Session = Depends(get_db), ):
    service = PlanService(db)
    return service.list_recent()


@router.get("/{plan_id}", summary="Get a stored plan.", response_model=SavedPlanResponse, )
def get_plan(plan_id: int, db: Session = Depends(get_db), ):
    service = PlanService(db)
    return service.get_by_id(plan_id)


@router.get("/{plan_id}/text", summary="Get a stored plan as plain text.", response_class=PlainTextResponse, )
def get_plan_text(plan_id: int, db: Session = Depends(get_db), ):
    service = PlanService(db)
    return service.get_text(plan_id)
