"""Child records and their link to the parent's children_list"""

from typing import Any, Dict, List

from ..core.transaction import TransactionService
from ..models.child import Child, ChildPublic
from ..models.principal import PrincipalType, TokenClaims
from ..models.user import ChildRef
from ..stores.child_store import ChildStore
from ..stores.user_store import UserStore
from ..utils.exceptions import BadRequestError, ForbiddenError, NotFoundError
from ..utils.logger import get_logger
from .errors import service_errors

logger = get_logger(__name__)

CHILD_NOT_FOUND = "Child record not found"

EDITABLE_FIELDS = {"name", "date_of_birth", "avatar", "pause_program"}


class ChildService:
    def __init__(
        self,
        store: ChildStore,
        user_store: UserStore,
        transactions: TransactionService,
    ):
        self.store = store
        self.user_store = user_store
        self.transactions = transactions

    def create(self, parent_id: str, name: str, date_of_birth: str, avatar: str = "") -> ChildPublic:
        """
        Insert the child and attach it to the parent in one transaction.

        The capacity check runs after the push, so exceeding
        ``parent.children`` rolls back both writes.
        """
        with service_errors("An error occurred while creating the child record"):

            def work(session: Any) -> Child:
                child = self.store.insert(
                    {
                        "parent_id": parent_id,
                        "name": name,
                        "date_of_birth": date_of_birth,
                        "assessment_results": [],
                        "program_list": [],
                        "pause_program": False,
                        "avatar": avatar or "",
                    },
                    session=session,
                )
                parent = self.user_store.push_child(
                    parent_id, ChildRef(id=child.id, name=child.name), session=session
                )
                if parent is None:
                    raise NotFoundError("User not found")
                if len(parent.children_list) > parent.children:
                    raise BadRequestError("Maximum number of children reached")
                return child

            child = self.transactions.with_transaction(work)

        logger.info("Child created", child_id=child.id, parent_id=parent_id)
        return ChildPublic.from_child(child)

    def find_all(self) -> List[ChildPublic]:
        with service_errors("An error occurred while fetching child records"):
            return [ChildPublic.from_child(c) for c in self.store.find_many()]

    def find_one(self, child_id: str) -> ChildPublic:
        with service_errors("An error occurred while fetching the child record"):
            return ChildPublic.from_child(self._get(child_id))

    def find_all_by_parent(self, parent_id: str) -> List[ChildPublic]:
        with service_errors("An error occurred while fetching child records"):
            return [ChildPublic.from_child(c) for c in self.store.find_by_parent(parent_id)]

    def update(self, child_id: str, changes: Dict[str, Any], requester: TokenClaims) -> ChildPublic:
        """Edit a child; a user may only edit its own children"""
        updates = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS and v is not None}
        with service_errors("An error occurred while updating the child record"):
            child = self._get(child_id)
            if requester.type == PrincipalType.USER and child.parent_id != requester.id:
                raise ForbiddenError("You are not allowed to update this child record")
            if not updates:
                return ChildPublic.from_child(child)

            def work(session: Any) -> Child:
                updated = self.store.update_by_id(child_id, updates, session=session)
                if updated is None:
                    raise NotFoundError(CHILD_NOT_FOUND)
                if "name" in updates:
                    # Keep the parent's cached name in step
                    self.user_store.rename_child(child.id, updates["name"], session=session)
                return updated

            updated = self.transactions.with_transaction(work)

        logger.info("Child updated", child_id=child_id, fields=sorted(updates))
        return ChildPublic.from_child(updated)

    def remove(self, child_id: str) -> Dict[str, str]:
        """Delete the child and detach it from the parent, both or neither"""
        with service_errors("An error occurred while deleting the child record"):

            def work(session: Any) -> Child:
                child = self.store.delete_by_id(child_id, session=session)
                if child is None:
                    raise NotFoundError(CHILD_NOT_FOUND)
                self.user_store.pull_child(child.parent_id, child.id, session=session)
                return child

            child = self.transactions.with_transaction(work)

        logger.info("Child deleted", child_id=child.id, parent_id=child.parent_id)
        return {"message": "Child record deleted successfully"}

    def add_program(self, child_id: str, program_id: str) -> ChildPublic:
        return self._modify_list(child_id, "program_list", program_id, add=True)

    def remove_program(self, child_id: str, program_id: str) -> ChildPublic:
        return self._modify_list(child_id, "program_list", program_id, add=False)

    def add_assessment_result(self, child_id: str, result_id: str) -> ChildPublic:
        return self._modify_list(child_id, "assessment_results", result_id, add=True)

    def remove_assessment_result(self, child_id: str, result_id: str) -> ChildPublic:
        return self._modify_list(child_id, "assessment_results", result_id, add=False)

    def _modify_list(self, child_id: str, field: str, value: str, add: bool) -> ChildPublic:
        with service_errors("An error occurred while updating the child record"):
            if add:
                child = self.store.add_to_list(child_id, field, value)
            else:
                child = self.store.remove_from_list(child_id, field, value)
            if child is None:
                raise NotFoundError(CHILD_NOT_FOUND)
            return ChildPublic.from_child(child)

    def _get(self, child_id: str) -> Child:
        child = self.store.find_by_id(child_id)
        if child is None:
            raise NotFoundError(CHILD_NOT_FOUND)
        return child
