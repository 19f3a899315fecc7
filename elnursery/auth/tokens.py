"""Functions for working with signed auth tokens."""

from datetime import datetime, timedelta

import jwt

from ..models.principal import TokenClaims
from ..utils.exceptions import UnauthorizedError


def encode(claims: TokenClaims, secret: str, expiry_hours: int = 24, algorithm: str = "HS256") -> str:
    """Sign the claim set as a time-limited JWT."""
    now = datetime.utcnow()
    payload = {
        "id": claims.id,
        "email": claims.email,
        "type": claims.type.value,
        "iat": now,
        "exp": now + timedelta(hours=expiry_hours),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode(token: str, secret: str, algorithm: str = "HS256") -> TokenClaims:
    """Verify signature and expiry, and return the claim set."""
    try:
        data: dict = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.exceptions.PyJWTError as e:
        raise UnauthorizedError("Failed to authenticate token") from e

    try:
        return TokenClaims(id=data["id"], email=data["email"], type=data["type"])
    except (KeyError, ValueError) as e:
        raise UnauthorizedError("User not authorized to access this resource") from e
