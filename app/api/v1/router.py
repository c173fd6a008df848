"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import health, plans, tasks

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    plans.router, prefix="/plans", tags=["Plans"]
)
api_router.include_router(
    tasks.router, prefix="/tasks", tags=["Task library"]
)
api_router.include_router(
    health.router, prefix="/health", tags=["Health profile"]
)
