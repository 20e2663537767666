from __future__ import annotations

from pymongo import MongoClient
from pymongo.collection import Collection

from textvault.core.logging import get_logger
from textvault.core.settings import MongoSettings

logger = get_logger(__name__)


# PUBLIC_INTERFACE
def create_mongo_client(mongo: MongoSettings) -> MongoClient:
    """Create a MongoClient from settings.

    The client connects lazily; callers own it and pass it (or a collection
    taken from it) to whatever needs storage.
    """
    logger.info("Connecting to MongoDB...", extra={"db": mongo.DB_NAME})
    return MongoClient(mongo.DB_URL, tz_aware=True)


# PUBLIC_INTERFACE
def documents_collection(client: MongoClient, mongo: MongoSettings) -> Collection:
    """Get the collection holding encrypted text documents."""
    return client[mongo.DB_NAME][mongo.DB_COLLECTION]
