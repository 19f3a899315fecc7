"""
Application container: wires settings, database, stores and services.
"""

from typing import Any, Optional

from .auth.passwords import PasswordHasher
from .auth.service import AuthService
from .core.database import create_client, ensure_indexes
from .core.transaction import TransactionService
from .models.principal import PrincipalType
from .services.admin_service import AdminService
from .services.bootstrap import ensure_owner_admin
from .services.child_service import ChildService
from .services.email_service import EmailService
from .services.maintenance import MaintenanceService
from .services.password_service import PasswordService
from .services.task_service import TaskService
from .services.user_service import UserService
from .stores import AdminStore, ChildStore, TaskStore, UserStore
from .utils.config import Settings, config_manager
from .utils.logger import get_logger

logger = get_logger(__name__)


class ElnurseryApp:
    """Main application"""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Any = None,
        email_service: Optional[EmailService] = None,
    ):
        self.settings = settings or config_manager.settings
        self.client = client if client is not None else create_client(self.settings.database)
        self.db = self.client[self.settings.database.name]

        ensure_indexes(self.db)

        self.admin_store = AdminStore(self.db)
        self.user_store = UserStore(self.db)
        self.child_store = ChildStore(self.db)
        self.task_store = TaskStore(self.db)
        self.principal_stores = {
            PrincipalType.ADMIN: self.admin_store,
            PrincipalType.USER: self.user_store,
        }

        self.hasher = PasswordHasher(rounds=self.settings.auth.bcrypt_rounds)
        self.transactions = TransactionService(self.client)
        self.email_service = email_service or EmailService(self.settings.email)

        self.admin_service = AdminService(
            self.admin_store, self.hasher, self.email_service, self.transactions
        )
        self.user_service = UserService(
            self.user_store, self.child_store, self.hasher, self.email_service, self.transactions
        )
        self.child_service = ChildService(self.child_store, self.user_store, self.transactions)
        self.task_service = TaskService(self.task_store)
        self.password_service = PasswordService(
            self.principal_stores, self.hasher, self.email_service, self.transactions
        )
        self.auth_service = AuthService(self.principal_stores, self.hasher, self.settings.auth)
        self.maintenance_service = MaintenanceService(
            self.user_service, retention_months=self.settings.maintenance.retention_months
        )

        logger.info(
            "Elnursery app initialized",
            environment=self.settings.app.environment,
            database=self.settings.database.name,
        )

    def bootstrap(self):
        """Run one-time startup steps"""
        return ensure_owner_admin(self.admin_service, self.settings.bootstrap)

    def run_maintenance(self) -> int:
        return self.maintenance_service.deactivate_expired_users()

    def close(self) -> None:
        self.client.close()
        logger.info("Database connection closed")
