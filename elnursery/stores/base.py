"""
Shared MongoDB collection access for the entity stores.

Every write takes an optional ``session`` so it can join a transaction
started by ``TransactionService``.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pymongo import ReturnDocument

from ..core.database import to_object_id

M = TypeVar("M")


class MongoStore(Generic[M]):
    """CRUD over one collection, returning parsed models"""

    collection_name: str = ""
    model: Type[Any]

    def __init__(self, db: Any):
        self.db = db

    @property
    def collection(self) -> Any:
        return self.db[self.collection_name]

    def _parse(self, doc: Optional[Dict[str, Any]]) -> Optional[M]:
        if doc is None:
            return None
        return self.model.from_document(doc)

    def insert(self, document: Dict[str, Any], session: Any = None) -> M:
        """Insert a document and return it as a model"""
        doc = dict(document)
        result = self.collection.insert_one(doc, session=session)
        doc["_id"] = result.inserted_id
        return self._parse(doc)

    def find_by_id(self, entity_id: Any, session: Any = None) -> Optional[M]:
        oid = to_object_id(entity_id)
        if oid is None:
            return None
        return self._parse(self.collection.find_one({"_id": oid}, session=session))

    def find_one(self, query: Dict[str, Any], session: Any = None) -> Optional[M]:
        return self._parse(self.collection.find_one(query, session=session))

    def find_many(self, query: Optional[Dict[str, Any]] = None) -> List[M]:
        return [self._parse(doc) for doc in self.collection.find(query or {})]

    def update_by_id(
        self, entity_id: Any, changes: Dict[str, Any], session: Any = None
    ) -> Optional[M]:
        """Apply ``$set`` changes and return the updated model, None when missing"""
        oid = to_object_id(entity_id)
        if oid is None:
            return None
        return self.update_raw({"_id": oid}, {"$set": changes}, session=session)

    def update_by_fields(
        self, query: Dict[str, Any], changes: Dict[str, Any], session: Any = None
    ) -> Optional[M]:
        return self.update_raw(query, {"$set": changes}, session=session)

    def update_raw(
        self, query: Dict[str, Any], update: Dict[str, Any], session: Any = None
    ) -> Optional[M]:
        doc = self.collection.find_one_and_update(
            query, update, return_document=ReturnDocument.AFTER, session=session
        )
        return self._parse(doc)

    def delete_by_id(self, entity_id: Any, session: Any = None) -> Optional[M]:
        """Delete by id and return the removed model, None when missing"""
        oid = to_object_id(entity_id)
        if oid is None:
            return None
        return self._parse(self.collection.find_one_and_delete({"_id": oid}, session=session))
