"""User (parent) persistence, including the children_list bookkeeping"""

from datetime import datetime
from typing import Any, List, Optional

from ..core.database import USERS, to_object_id
from ..models.user import ChildRef, User
from .base import MongoStore


class UserStore(MongoStore[User]):
    collection_name = USERS
    model = User

    def find_by_email(self, email: str, session: Any = None) -> Optional[User]:
        return self.find_one({"email": email}, session=session)

    def find_by_class(self, class_category: Optional[str] = None) -> List[User]:
        query = {"class": class_category} if class_category else {}
        return self.find_many(query)

    def push_child(self, user_id: Any, child: ChildRef, session: Any = None) -> Optional[User]:
        """Append to children_list and return the re-read user"""
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return self.update_raw(
            {"_id": oid},
            {"$push": {"children_list": child.model_dump()}},
            session=session,
        )

    def pull_child(self, user_id: Any, child_id: str, session: Any = None) -> Optional[User]:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return self.update_raw(
            {"_id": oid},
            {"$pull": {"children_list": {"id": child_id}}},
            session=session,
        )

    def deactivate_before(self, cutoff: datetime) -> int:
        """Deactivate active users last activated on or before ``cutoff``"""
        result = self.collection.update_many(
            {"is_active": True, "last_activated_date": {"$lte": cutoff}},
            {"$set": {"is_active": False}},
        )
        return result.modified_count

    def rename_child(self, child_id: str, name: str, session: Any = None) -> None:
        self.collection.update_one(
            {"children_list.id": child_id},
            {"$set": {"children_list.$.name": name}},
            session=session,
        )
