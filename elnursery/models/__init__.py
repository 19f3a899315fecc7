"""Data models for Elnursery"""

from .principal import PrincipalType, TokenClaims
from .admin import Admin, AdminPublic, OWNER_ROLE
from .user import User, UserPublic, ChildRef
from .child import Child, ChildPublic, compute_age
from .task import Task

__all__ = [
    "PrincipalType",
    "TokenClaims",
    "Admin",
    "AdminPublic",
    "OWNER_ROLE",
    "User",
    "UserPublic",
    "ChildRef",
    "Child",
    "ChildPublic",
    "compute_age",
    "Task",
]
