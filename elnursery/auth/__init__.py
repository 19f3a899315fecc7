"""Credentials, tokens and login"""

from .passwords import PasswordHasher, generate_random_password, hash_password, verify_password
from .service import AuthService

__all__ = [
    "PasswordHasher",
    "generate_random_password",
    "hash_password",
    "verify_password",
    "AuthService",
]
