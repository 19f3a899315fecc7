"""User (parent) data models"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .principal import document_to_dict


def default_class_category() -> str:
    """Class category defaults to the creation date, MM/DD/YYYY"""
    return datetime.utcnow().strftime("%m/%d/%Y")


class ChildRef(BaseModel):
    """Entry of a parent's children_list"""
    id: str
    name: str


class User(BaseModel):
    """User record as stored in the users collection"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    password: str
    name: str
    avatar: Optional[str] = None
    class_category: str = Field(default_factory=default_class_category, alias="class")
    children: int = 1
    children_list: List[ChildRef] = Field(default_factory=list)
    is_active: bool = True
    last_activated_date: Optional[datetime] = None
    forget_password_token: Optional[int] = None
    forget_password_token_expiry: Optional[datetime] = None
    change_password: bool = False

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "User":
        return cls(**document_to_dict(doc))


class UserPublic(BaseModel):
    """Externally returned user projection (no hash, no reset code)"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    name: str
    children: int = 1
    children_list: List[ChildRef] = Field(default_factory=list)
    class_category: Optional[str] = Field(default=None, alias="class")
    avatar: Optional[str] = None
    change_password: bool = False
    is_active: bool = True
    last_activated_date: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(**user.model_dump(include=set(cls.model_fields)))
