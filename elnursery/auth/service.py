"""Login for both principal types"""

from typing import Any, Mapping, Tuple

from ..models.principal import PrincipalType, TokenClaims
from ..stores.base import MongoStore
from ..utils.config import AuthSettings
from ..utils.exceptions import UnauthorizedError
from ..utils.logger import get_logger
from ..services.errors import service_errors
from . import tokens
from .passwords import PasswordHasher

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    def __init__(
        self,
        stores: Mapping[PrincipalType, MongoStore],
        hasher: PasswordHasher,
        settings: AuthSettings,
    ):
        self.stores = stores
        self.hasher = hasher
        self.settings = settings

    def login(self, email: str, password: str, principal_type: PrincipalType) -> Tuple[str, Any]:
        """
        Verify credentials and issue a signed token.

        Unknown email and wrong password fail identically.
        Returns ``(token, principal)``.
        """
        with service_errors("An error occurred while logging in"):
            principal = self.stores[principal_type].find_by_email(email)
            if principal is None or not self.hasher.verify(password, principal.password):
                logger.info("Login failed", type=principal_type.value)
                raise UnauthorizedError(INVALID_CREDENTIALS)

            if principal_type == PrincipalType.USER and not principal.is_active:
                raise UnauthorizedError("Account is inactive")

            claims = TokenClaims(id=principal.id, email=principal.email, type=principal_type)
            token = tokens.encode(
                claims,
                self.settings.jwt_secret,
                expiry_hours=self.settings.token_expiry_hours,
                algorithm=self.settings.jwt_algorithm,
            )

        logger.info("Login successful", principal_id=principal.id, type=principal_type.value)
        return token, principal

    def verify_token(self, token: str) -> TokenClaims:
        return tokens.decode(token, self.settings.jwt_secret, algorithm=self.settings.jwt_algorithm)
