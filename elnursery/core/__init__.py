"""Database handle and transactions"""

from .database import create_client, ensure_indexes, to_object_id
from .transaction import TransactionService

__all__ = ["create_client", "ensure_indexes", "to_object_id", "TransactionService"]
