"""
Health profile endpoints.
"""

from fastapi import APIRouter

from app.schemas.api import HealthConstraintsResponse
from app.schemas.intake import HealthProfile
from app.services.catalog_service import CatalogService

router = APIRouter()


@router.post("/constraints", summary="Evaluate how a health profile restricts the task library.",
             response_model=HealthConstraintsResponse, )
def evaluate_constraints(profile: HealthProfile):
    return CatalogService.health_constraints(profile)
