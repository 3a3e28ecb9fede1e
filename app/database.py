"""MongoDB connection management"""

from datetime import datetime, timezone
from typing import Optional

import structlog
from pymongo import AsyncMongoClient

from app.config import settings

logger = structlog.get_logger()

_client: Optional[AsyncMongoClient] = None


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in MongoDB"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_client() -> AsyncMongoClient:
    """Get the process-wide MongoDB client, creating it on first use"""
    global _client
    if _client is None:
        logger.info("Connecting to MongoDB", database=settings.mongodb_db_name)
        _client = AsyncMongoClient(settings.mongodb_uri)
    return _client


def get_database():
    """Get the application database handle"""
    return get_client()[settings.mongodb_db_name]


async def get_db():
    """Dependency for getting the database handle"""
    yield get_database()


async def ping(db) -> None:
    """Round-trip to the server; raises if it is unreachable"""
    await db.command("ping")


async def ensure_indexes(db) -> None:
    """Create the indexes used by listing and maintenance queries"""
    reservations = db["reservations"]
    await reservations.create_index("createdAt")
    await reservations.create_index("status")
    await reservations.create_index("branch")


async def close_connection() -> None:
    """Close the cached client, if any"""
    global _client
    if _client is not None:
        await _client.close()
        _client = None
        logger.info("MongoDB connection closed")
