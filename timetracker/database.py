"""MongoDB database connection using Motor (async driver)."""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorClientSession,
    AsyncIOMotorDatabase,
)
from pymongo import ASCENDING, DESCENDING, IndexModel

from timetracker.config import settings

logger = logging.getLogger(__name__)


class Database:
    """MongoDB database connection manager."""

    client: AsyncIOMotorClient | None = None
    db: AsyncIOMotorDatabase | None = None

    async def connect(self) -> None:
        """Connect to MongoDB and make sure the indexes exist."""
        self.client = AsyncIOMotorClient(settings.mongodb_url)
        self.db = self.client[settings.mongodb_db_name]
        await ensure_indexes(self.db)
        logger.info("Connected to MongoDB: %s", settings.mongodb_db_name)

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client is not None:
            self.client.close()
            logger.info("Disconnected from MongoDB")

    def get_collection(self, name: str):
        """Get a MongoDB collection."""
        if self.db is None:
            raise RuntimeError("Database not connected")
        return self.db[name]


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """
    Create the indexes the stores rely on.

    The partial unique index on ``timers.work_log_id`` allows at most one
    RUNNING timer per work log, so two concurrent starts cannot both insert.
    """
    await db["users"].create_indexes([
        IndexModel([("username", ASCENDING)], unique=True, name="username_unique"),
    ])
    await db["work_logs"].create_indexes([
        IndexModel([("owner_id", ASCENDING), ("created_at", ASCENDING)], name="owner_created"),
    ])
    await db["timers"].create_indexes([
        IndexModel(
            [("work_log_id", ASCENDING), ("started_at", DESCENDING)],
            name="work_log_started",
        ),
        IndexModel(
            [("work_log_id", ASCENDING)],
            unique=True,
            partialFilterExpression={"status": "RUNNING"},
            name="one_running_timer_per_work_log",
        ),
    ])


@asynccontextmanager
async def transaction(db) -> AsyncIterator[Optional[AsyncIOMotorClientSession]]:
    """
    Run the enclosed writes in one MongoDB transaction.

    Yields the session to pass to every store call. When transactions are
    disabled in settings the block runs without a session.
    """
    if not settings.mongodb_transactions:
        yield None
        return

    async with await db.client.start_session() as session:
        async with session.start_transaction():
            yield session


# Global database instance
database = Database()


async def get_database() -> AsyncIOMotorDatabase:
    """Dependency to get database instance."""
    if database.db is None:
        raise RuntimeError("Database not connected")
    return database.db
