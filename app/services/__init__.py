"""Business logic services."""

from app.services.catalog_service import CatalogService
from app.services.plan_service import PlanService

__all__ = [
    "CatalogService",
    "PlanService",
]
