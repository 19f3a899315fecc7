"""Child data models"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, Field

from .principal import document_to_dict


def compute_age(date_of_birth: str, now: Optional[datetime] = None) -> Optional[str]:
    """
    Derive "<Y> years <M> months" from a stored date of birth.

    Computed at read time only; returns None when the date cannot be parsed.
    """
    try:
        dob = date_parser.parse(date_of_birth)
    except (ValueError, OverflowError):
        return None
    now = now or datetime.utcnow()
    delta = relativedelta(now, dob.replace(tzinfo=None))
    return f"{abs(delta.years)} years {abs(delta.months)} months"


class Child(BaseModel):
    """Child record as stored in the children collection"""
    id: str
    parent_id: str
    name: str
    date_of_birth: str
    assessment_results: List[str] = Field(default_factory=list)
    program_list: List[str] = Field(default_factory=list)
    pause_program: bool = False
    avatar: str = ""

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Child":
        return cls(**document_to_dict(doc))

    @property
    def age(self) -> Optional[str]:
        return compute_age(self.date_of_birth)


class ChildPublic(BaseModel):
    """Externally returned child projection"""
    id: str
    parent_id: str
    name: str
    date_of_birth: str
    age: Optional[str] = None
    pause_program: bool = False
    avatar: str = ""
    assessment_results: List[str] = Field(default_factory=list)
    program_list: List[str] = Field(default_factory=list)

    @classmethod
    def from_child(cls, child: Child) -> "ChildPublic":
        return cls(age=child.age, **child.model_dump())
