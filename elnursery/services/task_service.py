"""Task catalogue management"""

from typing import Any, Dict, List, Optional

from ..models.task import Task
from ..stores.task_store import TaskStore
from ..utils.exceptions import ConflictError, NotFoundError
from ..utils.logger import get_logger
from .errors import service_errors

logger = get_logger(__name__)

DUPLICATE_TASK = "Task with the title already exist with the same category"
TASK_NOT_FOUND = "Task with the id not found"

EDITABLE_FIELDS = {"title", "category", "description", "data", "level"}


class TaskService:
    def __init__(self, store: TaskStore):
        self.store = store

    def create(
        self, title: str, category: str, data: str, description: str = "", level: int = 0
    ) -> Task:
        with service_errors("An error occurred while creating the task", DUPLICATE_TASK):
            if self.store.find_by_title_and_category(title, category):
                raise ConflictError(DUPLICATE_TASK)
            task = self.store.insert(
                {
                    "title": title,
                    "category": category,
                    "description": description or "",
                    "data": data,
                    "level": level,
                }
            )
        logger.info("Task created", task_id=task.id)
        return task

    def find_all(
        self,
        title: Optional[str] = None,
        category: Optional[str] = None,
        level: Optional[int] = None,
    ) -> List[Task]:
        with service_errors("An error occurred while fetching tasks"):
            return self.store.search(title=title, category=category, level=level)

    def find_one(self, task_id: str) -> Task:
        with service_errors("An error occurred while fetching the task"):
            task = self.store.find_by_id(task_id)
            if task is None:
                raise NotFoundError(TASK_NOT_FOUND)
            return task

    def update(self, task_id: str, changes: Dict[str, Any]) -> Task:
        updates = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS and v is not None}
        with service_errors("An error occurred while updating the task", DUPLICATE_TASK):
            current = self.find_one(task_id)
            if "title" in updates or "category" in updates:
                clash = self.store.find_by_title_and_category(
                    updates.get("title", current.title),
                    updates.get("category", current.category),
                )
                if clash and clash.id != current.id:
                    raise ConflictError(DUPLICATE_TASK)
            if not updates:
                return current
            task = self.store.update_by_id(task_id, updates)
            if task is None:
                raise NotFoundError(TASK_NOT_FOUND)
        logger.info("Task updated", task_id=task_id, fields=sorted(updates))
        return task

    def remove(self, task_id: str) -> Dict[str, str]:
        with service_errors("An error occurred while deleting the task"):
            if self.store.delete_by_id(task_id) is None:
                raise NotFoundError(TASK_NOT_FOUND)
        logger.info("Task deleted", task_id=task_id)
        return {"message": "Task deleted successfully"}
