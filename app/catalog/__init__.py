"""Built-in task library."""

from app.catalog.tasks import TASK_CATALOG, all_tasks, get_task, tasks_by_pillar

__all__ = ["TASK_CATALOG", "all_tasks", "get_task", "tasks_by_pillar"]
