"""Error propagation shared by the services"""

from contextlib import contextmanager
from typing import Iterator, Optional

from pymongo.errors import DuplicateKeyError

from ..utils.exceptions import ConflictError, DomainError, InternalError
from ..utils.logger import get_logger

logger = get_logger(__name__)


@contextmanager
def service_errors(message: str, conflict_message: Optional[str] = None) -> Iterator[None]:
    """
    Pass domain errors through; turn everything else into InternalError.

    A unique-index violation becomes ConflictError when ``conflict_message``
    is given.
    """
    try:
        yield
    except DomainError:
        raise
    except DuplicateKeyError as e:
        if conflict_message:
            raise ConflictError(conflict_message) from e
        logger.exception(message, error=str(e))
        raise InternalError(message) from e
    except Exception as e:
        logger.exception(message, error=str(e))
        raise InternalError(message) from e
