"""
Password lifecycle for admins and users: change with the old password,
request a reset code by email, and change with that code.
"""

import secrets
from datetime import datetime, timedelta
from typing import Any, Dict, Mapping

from ..auth.passwords import PasswordHasher
from ..core.transaction import TransactionService
from ..models.principal import PrincipalType
from ..stores.base import MongoStore
from ..utils.exceptions import BadRequestError, NotFoundError
from ..utils.logger import get_logger
from .email_service import EmailService
from .errors import service_errors

logger = get_logger(__name__)

RESET_CODE_TTL = timedelta(hours=1)

NOT_FOUND_MESSAGES = {
    PrincipalType.ADMIN: "Admin not found",
    PrincipalType.USER: "User not found",
}


def generate_reset_code() -> int:
    """Six-digit numeric code"""
    return secrets.randbelow(900000) + 100000


class PasswordService:
    def __init__(
        self,
        stores: Mapping[PrincipalType, MongoStore],
        hasher: PasswordHasher,
        email_service: EmailService,
        transactions: TransactionService,
    ):
        self.stores = stores
        self.hasher = hasher
        self.email_service = email_service
        self.transactions = transactions

    def change_password(
        self,
        principal_id: str,
        principal_type: PrincipalType,
        old_password: str,
        new_password: str,
    ) -> Dict[str, str]:
        """Change a password after verifying the current one"""
        store = self.stores[principal_type]
        with service_errors("An error occurred while changing the password"):
            principal = store.find_by_id(principal_id)
            if principal is None:
                raise BadRequestError(NOT_FOUND_MESSAGES[principal_type])
            if not self.hasher.verify(old_password, principal.password):
                raise BadRequestError("Old password is incorrect")
            store.update_by_id(
                principal_id,
                {"password": self.hasher.hash(new_password), "change_password": True},
            )

        logger.info("Password changed", principal_id=principal_id, type=principal_type.value)
        return {"message": "Password changed successfully"}

    def reset_password(self, email: str, principal_type: PrincipalType) -> Dict[str, str]:
        """Store a fresh reset code and email it; both happen or neither"""
        store = self.stores[principal_type]
        with service_errors("Couldn't reset password"):
            principal = store.find_by_email(email)
            if principal is None:
                raise NotFoundError(NOT_FOUND_MESSAGES[principal_type])

            def work(session: Any) -> None:
                code = generate_reset_code()
                store.update_by_id(
                    principal.id,
                    {
                        "forget_password_token": code,
                        "forget_password_token_expiry": datetime.utcnow() + RESET_CODE_TTL,
                    },
                    session=session,
                )
                self.email_service.send_reset_code(principal.email, principal.name, code)

            self.transactions.with_transaction(work)

        logger.info("Password reset requested", principal_id=principal.id, type=principal_type.value)
        return {"message": "Password reset email sent successfully"}

    def change_password_by_token(
        self,
        email: str,
        code: int,
        new_password: str,
        principal_type: PrincipalType,
    ) -> Dict[str, str]:
        """Set a new password using an unexpired reset code, then clear the code"""
        store = self.stores[principal_type]
        with service_errors("Couldn't reset password"):
            principal = store.find_by_email(email)
            if principal is None:
                raise NotFoundError(NOT_FOUND_MESSAGES[principal_type])

            expiry = principal.forget_password_token_expiry
            if (
                principal.forget_password_token is None
                or principal.forget_password_token != code
                or expiry is None
                or expiry < datetime.utcnow()
            ):
                raise BadRequestError("Code is incorrect or expired")

            store.update_by_id(
                principal.id,
                {
                    "password": self.hasher.hash(new_password),
                    "change_password": True,
                    "forget_password_token": None,
                    "forget_password_token_expiry": None,
                },
            )

        logger.info("Password changed with reset code", principal_id=principal.id)
        return {"message": "Password changed successfully"}
