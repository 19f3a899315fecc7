"""Task data models"""

from typing import Any, Dict

from pydantic import BaseModel

from .principal import document_to_dict


class Task(BaseModel):
    """Task content item; (title, category) is unique"""
    id: str
    title: str
    category: str
    description: str = ""
    data: str
    level: int = 0

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Task":
        return cls(**document_to_dict(doc))
