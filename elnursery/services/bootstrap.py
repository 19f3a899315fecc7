"""Startup step that makes sure the owner admin exists"""

from typing import Optional

from ..models.admin import OWNER_ROLE, AdminPublic
from ..utils.config import BootstrapSettings
from ..utils.exceptions import ElnurseryError
from ..utils.logger import get_logger
from .admin_service import AdminService

logger = get_logger(__name__)


def ensure_owner_admin(
    admin_service: AdminService, settings: BootstrapSettings
) -> Optional[AdminPublic]:
    """
    Create the owner admin if it does not exist yet. Idempotent.

    Returns the created admin, or None when nothing was created.
    """
    if not settings.admin_email:
        logger.warning("No bootstrap admin email configured; skipping owner creation")
        return None

    if admin_service.find_one_by_email(settings.admin_email):
        logger.info("Owner admin already exists")
        return None

    try:
        admin = admin_service.create(
            name=settings.admin_name,
            email=settings.admin_email,
            roles=[OWNER_ROLE],
        )
    except ElnurseryError as e:
        # Startup continues; the next start retries
        logger.error("Failed to create owner admin", error=str(e))
        return None

    logger.info("Owner admin created", admin_id=admin.id)
    return admin
