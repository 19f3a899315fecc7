"""Task persistence"""

import re
from typing import Any, Dict, List, Optional

from ..core.database import TASKS
from ..models.task import Task
from .base import MongoStore


class TaskStore(MongoStore[Task]):
    collection_name = TASKS
    model = Task

    def find_by_title_and_category(self, title: str, category: str) -> Optional[Task]:
        return self.find_one({"title": title, "category": category})

    def search(
        self,
        title: Optional[str] = None,
        category: Optional[str] = None,
        level: Optional[int] = None,
    ) -> List[Task]:
        """Case-insensitive substring match on title/category, exact level"""
        query: Dict[str, Any] = {}
        if title:
            query["title"] = {"$regex": re.escape(title), "$options": "i"}
        if category:
            query["category"] = {"$regex": re.escape(category), "$options": "i"}
        if level is not None:
            query["level"] = level
        return self.find_many(query)
