"""Admin persistence"""

from typing import Any, Optional

from ..core.database import ADMINS
from ..models.admin import Admin
from .base import MongoStore


class AdminStore(MongoStore[Admin]):
    collection_name = ADMINS
    model = Admin

    def find_by_email(self, email: str, session: Any = None) -> Optional[Admin]:
        return self.find_one({"email": email}, session=session)
