"""Admin account management"""

from typing import Any, Dict, List, Optional

from ..auth.passwords import PasswordHasher
from ..core.transaction import TransactionService
from ..models.admin import Admin, AdminPublic
from ..models.principal import PrincipalType
from ..stores.admin_store import AdminStore
from ..utils.exceptions import BadRequestError, ConflictError, NotFoundError
from ..utils.logger import get_logger
from .email_service import EmailService
from .errors import service_errors

logger = get_logger(__name__)

DUPLICATE_ADMIN = "Admin with this email already exist"


class AdminService:
    def __init__(
        self,
        store: AdminStore,
        hasher: PasswordHasher,
        email_service: EmailService,
        transactions: TransactionService,
    ):
        self.store = store
        self.hasher = hasher
        self.email_service = email_service
        self.transactions = transactions

    def create(self, name: str, email: str, roles: Optional[List[str]] = None) -> AdminPublic:
        """
        Create an admin with a generated password and email it.

        Insert and email run in one transaction: if the email cannot be
        sent, the admin is not persisted.
        """
        with service_errors("An Error occurred while creating the admin", DUPLICATE_ADMIN):
            if self.store.find_by_email(email):
                raise ConflictError(DUPLICATE_ADMIN)

            def work(session: Any) -> Admin:
                password = self.hasher.generate()
                admin = self.store.insert(
                    {
                        "email": email,
                        "password": self.hasher.hash(password),
                        "name": name,
                        "avatar": None,
                        "roles": list(roles or []),
                        "forget_password_token": None,
                        "forget_password_token_expiry": None,
                        "change_password": False,
                    },
                    session=session,
                )
                self.email_service.send_account_credentials(
                    email, name, password, PrincipalType.ADMIN
                )
                return admin

            admin = self.transactions.with_transaction(work)

        logger.info("Admin created", admin_id=admin.id)
        return AdminPublic.from_admin(admin)

    def find_all(self) -> List[AdminPublic]:
        with service_errors("An error occurred while fetching admins"):
            return [AdminPublic.from_admin(a) for a in self.store.find_many()]

    def find_one(self, admin_id: str) -> AdminPublic:
        with service_errors("An error occurred while fetching the admin"):
            admin = self.store.find_by_id(admin_id)
            if admin is None:
                raise NotFoundError("Admin not found")
            return AdminPublic.from_admin(admin)

    def find_one_by_email(self, email: str) -> Optional[Admin]:
        return self.store.find_by_email(email)

    def update_by_id(self, admin_id: str, changes: Dict[str, Any], session: Any = None) -> Admin:
        admin = self.store.update_by_id(admin_id, changes, session=session)
        if admin is None:
            raise NotFoundError("Admin not found")
        return admin

    def update_by_fields(
        self, query: Dict[str, Any], changes: Dict[str, Any], session: Any = None
    ) -> Admin:
        admin = self.store.update_by_fields(query, changes, session=session)
        if admin is None:
            raise NotFoundError("Admin not found")
        return admin

    def remove(self, admin_id: str) -> Dict[str, str]:
        """Delete an admin; the owner account is protected"""
        with service_errors("An error occurred while deleting the admin"):
            admin = self.store.find_by_id(admin_id)
            if admin is None:
                raise NotFoundError("Admin not found")
            if admin.is_owner:
                raise BadRequestError("You cannot delete the owner account")
            self.store.delete_by_id(admin_id)

        logger.info("Admin deleted", admin_id=admin_id)
        return {"message": "Successfully deleted admin from records"}
