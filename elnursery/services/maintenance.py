"""Daily deactivation of users who have not been re-activated recently"""

from datetime import datetime
from typing import Optional

from dateutil.relativedelta import relativedelta

from ..utils.logger import get_logger
from .user_service import UserService

logger = get_logger(__name__)


class MaintenanceService:
    def __init__(self, user_service: UserService, retention_months: int = 3):
        self.user_service = user_service
        self.retention_months = retention_months

    def cutoff(self, now: Optional[datetime] = None) -> datetime:
        return (now or datetime.utcnow()) - relativedelta(months=self.retention_months)

    def deactivate_expired_users(self, now: Optional[datetime] = None) -> int:
        """Deactivate users last activated on or before the cutoff; returns the count"""
        cutoff = self.cutoff(now)
        logger.info("Running user deactivation", cutoff=cutoff.isoformat())
        return self.user_service.deactivate_expired_users(cutoff)
