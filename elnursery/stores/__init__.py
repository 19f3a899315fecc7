"""MongoDB-backed entity stores"""

from .admin_store import AdminStore
from .user_store import UserStore
from .child_store import ChildStore
from .task_store import TaskStore

__all__ = ["AdminStore", "UserStore", "ChildStore", "TaskStore"]
