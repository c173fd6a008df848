"""
Catalog service.

Read-only access to the built-in task library and to how a health
profile constrains it.
"""

from typing import Optional

from fastapi import HTTPException, status

from app.blueprint import health
from app.catalog import all_tasks, get_task, tasks_by_pillar
from app.schemas.api import HealthConstraintsResponse
from app.schemas.intake import HealthProfile
from app.schemas.task import Pillar, Task


class CatalogService:
    """Service for task library lookups."""

    @staticmethod
    def list_tasks(pillar: Optional[Pillar] = None) -> list[Task]:
        if pillar is None:
            return all_tasks()
        return tasks_by_pillar(pillar)

    @staticmethod
    def get_task(task_id: str) -> Task:
        task = get_task(task_id)
        if task is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Task '{task_id}' not found")
        return task

    @staticmethod
    def health_constraints(profile: HealthProfile) -> HealthConstraintsResponse:
        library = all_tasks()
        kept = {t.id for t in health.filter_library(library, profile)}
        return HealthConstraintsResponse(
            intensity_cap=health.intensity_cap(profile),
            warnings=health.warnings(profile),
            summary=health.health_summary(profile),
            excluded_task_ids=[t.id for t in library if t.id not in kept],
        )
