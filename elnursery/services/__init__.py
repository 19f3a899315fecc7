"""Orchestration layer over the stores"""

from .admin_service import AdminService
from .user_service import UserService
from .child_service import ChildService
from .task_service import TaskService
from .password_service import PasswordService
from .email_service import EmailService
from .maintenance import MaintenanceService
from .bootstrap import ensure_owner_admin

__all__ = [
    "AdminService",
    "UserService",
    "ChildService",
    "TaskService",
    "PasswordService",
    "EmailService",
    "MaintenanceService",
    "ensure_owner_admin",
]
