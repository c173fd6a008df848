"""
Task library endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Query

from app.schemas.task import Pillar, Task
from app.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", summary="List library tasks, optionally for one pillar.", response_model=list[Task], )
def list_tasks(pillar: Optional[Pillar] = Query(None, description="Only tasks of this pillar"), ):
    return CatalogService.list_tasks(pillar)


@router.get("/{task_id}", summary="Get a library task.", response_model=Task, )
def get_task(task_id: str):
    return CatalogService.get_task(task_id)
