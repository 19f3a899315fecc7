"""MongoDB connection, collection names and index setup"""

from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, MongoClient

from ..utils.config import DatabaseSettings
from ..utils.logger import get_logger

logger = get_logger(__name__)

ADMINS = "admins"
USERS = "users"
CHILDREN = "children"
TASKS = "tasks"


def create_client(settings: DatabaseSettings) -> MongoClient:
    """Create a client; transactions need a replica set URI"""
    uri = settings.connection_uri()
    logger.info("Connecting to MongoDB", host=settings.host, database=settings.name)
    return MongoClient(uri, tz_aware=False)


def ensure_indexes(db: Any) -> None:
    """Create the unique indexes that back the uniqueness invariants"""
    db[ADMINS].create_index([("email", ASCENDING)], unique=True)
    db[USERS].create_index([("email", ASCENDING)], unique=True)
    db[CHILDREN].create_index([("parent_id", ASCENDING)])
    db[TASKS].create_index([("title", ASCENDING), ("category", ASCENDING)], unique=True)
    logger.info("Database indexes ensured")


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parse an id string; None when it is not a valid ObjectId"""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None
