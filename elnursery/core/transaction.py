"""
Unit-of-work runner over MongoDB session transactions.

Every store write inside the unit of work must be given the session it
receives, otherwise the write is not part of the transaction.
"""

from typing import Any, Callable, TypeVar

from ..utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class TransactionService:
    """Runs callbacks inside a single transactional boundary"""

    def __init__(self, client: Any):
        self.client = client

    def with_transaction(self, work: Callable[[Any], T]) -> T:
        """
        Run ``work(session)`` in a transaction.

        Commits when ``work`` returns; aborts and re-raises the original
        exception unchanged when it raises.
        """
        with self.client.start_session() as session:
            try:
                with session.start_transaction():
                    result = work(session)
            except Exception as e:
                logger.warning("Transaction aborted", error_type=type(e).__name__)
                raise
            return result
