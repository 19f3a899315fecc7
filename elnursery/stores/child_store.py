"""Child persistence"""

from typing import Any, List, Optional

from ..core.database import CHILDREN, to_object_id
from ..models.child import Child
from .base import MongoStore


class ChildStore(MongoStore[Child]):
    collection_name = CHILDREN
    model = Child

    def find_by_parent(self, parent_id: str) -> List[Child]:
        return self.find_many({"parent_id": parent_id})

    def delete_by_parent(self, parent_id: str, session: Any = None) -> int:
        result = self.collection.delete_many({"parent_id": parent_id}, session=session)
        return result.deleted_count

    def add_to_list(self, child_id: Any, field: str, value: str) -> Optional[Child]:
        """Add a reference to a list field, ignoring duplicates"""
        oid = to_object_id(child_id)
        if oid is None:
            return None
        return self.update_raw({"_id": oid}, {"$addToSet": {field: value}})

    def remove_from_list(self, child_id: Any, field: str, value: str) -> Optional[Child]:
        oid = to_object_id(child_id)
        if oid is None:
            return None
        return self.update_raw({"_id": oid}, {"$pull": {field: value}})
