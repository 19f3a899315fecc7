"""Custom exceptions for the Elnursery backend"""

from typing import Optional


class ElnurseryError(Exception):
    """Base exception for Elnursery"""
    pass


class DomainError(ElnurseryError):
    """Error raised deliberately by a service; passed through to the caller unchanged"""

    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(DomainError):
    """Entity lookup miss"""
    status_code = 404
    default_message = "Resource not found"


class ConflictError(DomainError):
    """Uniqueness violation (email, title + category)"""
    status_code = 409
    default_message = "Resource already exists"


class BadRequestError(DomainError):
    """Domain rule violation"""
    status_code = 400
    default_message = "Bad request"


class UnauthorizedError(DomainError):
    """Missing or invalid token, or wrong credentials"""
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(DomainError):
    """Authenticated principal is not allowed on this resource"""
    status_code = 403
    default_message = "Forbidden"


class InternalError(DomainError):
    """Anything unanticipated, with a fixed non-leaking message"""
    status_code = 500


class NotificationError(ElnurseryError):
    """Outbound email could not be delivered"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ConfigError(ElnurseryError):
    """Configuration error"""
    pass
