"""User (parent) account management"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from ..auth.passwords import PasswordHasher
from ..core.transaction import TransactionService
from ..models.principal import PrincipalType
from ..models.user import ChildRef, User, UserPublic, default_class_category
from ..stores.child_store import ChildStore
from ..stores.user_store import UserStore
from ..utils.exceptions import ConflictError, NotFoundError
from ..utils.logger import get_logger
from .email_service import EmailService
from .errors import service_errors

logger = get_logger(__name__)

DUPLICATE_USER = "User already exists"

# Fields an admin may edit; ``class_category`` is stored as ``class``
EDITABLE_FIELDS = {"name", "email", "avatar", "class_category", "children", "is_active"}


class UserService:
    def __init__(
        self,
        store: UserStore,
        child_store: ChildStore,
        hasher: PasswordHasher,
        email_service: EmailService,
        transactions: TransactionService,
    ):
        self.store = store
        self.child_store = child_store
        self.hasher = hasher
        self.email_service = email_service
        self.transactions = transactions

    def create(
        self,
        name: str,
        email: str,
        class_category: Optional[str] = None,
        children: Optional[int] = None,
    ) -> UserPublic:
        """Create a user with a generated password and email it, atomically"""
        with service_errors("An Error occurred while creating the user", DUPLICATE_USER):
            if self.store.find_by_email(email):
                raise ConflictError(DUPLICATE_USER)

            def work(session: Any) -> User:
                password = self.hasher.generate()
                user = self.store.insert(
                    {
                        "email": email,
                        "password": self.hasher.hash(password),
                        "name": name,
                        "avatar": None,
                        "class": class_category or default_class_category(),
                        "children": children if children is not None else 1,
                        "children_list": [],
                        "is_active": True,
                        "last_activated_date": datetime.utcnow(),
                        "forget_password_token": None,
                        "forget_password_token_expiry": None,
                        "change_password": False,
                    },
                    session=session,
                )
                self.email_service.send_account_credentials(
                    email, name, password, PrincipalType.USER
                )
                return user

            user = self.transactions.with_transaction(work)

        logger.info("User created", user_id=user.id)
        return UserPublic.from_user(user)

    def find_all(self, class_category: Optional[str] = None) -> List[UserPublic]:
        with service_errors("An error occurred while fetching users"):
            return [UserPublic.from_user(u) for u in self.store.find_by_class(class_category)]

    def find_one(self, user_id: str) -> UserPublic:
        with service_errors("An error occurred while fetching the user"):
            user = self.store.find_by_id(user_id)
            if user is None:
                raise NotFoundError("User not found")
            return UserPublic.from_user(user)

    def find_one_by_email(self, email: str) -> Optional[User]:
        return self.store.find_by_email(email)

    def update(self, user_id: str, changes: Dict[str, Any]) -> UserPublic:
        """Admin edit of a user record"""
        updates = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS and v is not None}
        if "class_category" in updates:
            updates["class"] = updates.pop("class_category")
        if updates.get("is_active") is True:
            updates["last_activated_date"] = datetime.utcnow()

        with service_errors("An error occurred while updating the user", DUPLICATE_USER):
            if "email" in updates:
                existing = self.store.find_by_email(updates["email"])
                if existing and existing.id != user_id:
                    raise ConflictError(DUPLICATE_USER)
            user = self.update_by_id(user_id, updates) if updates else self.store.find_by_id(user_id)
            if user is None:
                raise NotFoundError("User not found")

        logger.info("User updated", user_id=user_id, fields=sorted(updates))
        return UserPublic.from_user(user)

    def update_profile(self, user_id: str, avatar: Optional[str]) -> UserPublic:
        """A user's edit of its own profile"""
        with service_errors("An error occurred while updating the profile"):
            return UserPublic.from_user(self.update_by_id(user_id, {"avatar": avatar}))

    def update_by_id(self, user_id: str, changes: Dict[str, Any], session: Any = None) -> User:
        user = self.store.update_by_id(user_id, changes, session=session)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_by_fields(
        self, query: Dict[str, Any], changes: Dict[str, Any], session: Any = None
    ) -> User:
        user = self.store.update_by_fields(query, changes, session=session)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def add_child(self, user_id: str, child: ChildRef, session: Any = None) -> User:
        user = self.store.push_child(user_id, child, session=session)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def remove_child(self, user_id: str, child_id: str, session: Any = None) -> User:
        user = self.store.pull_child(user_id, child_id, session=session)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def remove(self, user_id: str) -> Dict[str, str]:
        """Delete a user together with its children"""
        with service_errors("An error occurred while deleting the user"):
            user = self.store.find_by_id(user_id)
            if user is None:
                raise NotFoundError("User not found")

            def work(session: Any) -> int:
                removed = self.child_store.delete_by_parent(user.id, session=session)
                self.store.delete_by_id(user.id, session=session)
                return removed

            children_removed = self.transactions.with_transaction(work)

        logger.info("User deleted", user_id=user_id, children_removed=children_removed)
        return {"message": "User deleted successfully"}

    def deactivate_expired_users(self, cutoff: datetime) -> int:
        count = self.store.deactivate_before(cutoff)
        logger.info("Deactivated expired users", count=count, cutoff=cutoff.isoformat())
        return count
