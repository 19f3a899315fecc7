"""Admin data models"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .principal import document_to_dict

OWNER_ROLE = "owner"


class Admin(BaseModel):
    """Admin record as stored in the admins collection"""
    id: str
    email: str
    password: str
    name: str
    avatar: Optional[str] = None
    roles: List[str] = Field(default_factory=list)
    forget_password_token: Optional[int] = None
    forget_password_token_expiry: Optional[datetime] = None
    change_password: bool = False

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Admin":
        return cls(**document_to_dict(doc))

    @property
    def is_owner(self) -> bool:
        return OWNER_ROLE in self.roles


class AdminPublic(BaseModel):
    """Externally returned admin projection (no hash, no reset code)"""
    id: str
    email: str
    name: str
    roles: List[str] = Field(default_factory=list)
    avatar: Optional[str] = None
    change_password: bool = False

    @classmethod
    def from_admin(cls, admin: Admin) -> "AdminPublic":
        return cls(**admin.model_dump(include=set(cls.model_fields)))
