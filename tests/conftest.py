"""Pytest configuration and fixtures."""
import os

os.environ.setdefault("MONGODB_URL", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DB_NAME", "time_tracker")
os.environ.setdefault("MONGODB_TRANSACTIONS", "false")
os.environ.setdefault("JWT_SECRET", "test-secret-key")

from datetime import datetime

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from timetracker.config import settings
from timetracker.database import database, ensure_indexes
from timetracker.main import app
from timetracker.models.user import User


@pytest.fixture
def acting_user():
    """A user that owns the resources in service tests."""
    return User(
        id="65a1f0c2e4b0a1b2c3d4e5f6",
        username="owner@example.com",
        name="Owner",
        created_at=datetime(2024, 1, 1, 9, 0),
    )


@pytest.fixture
def other_user():
    """A second user with no access to ``acting_user``'s data."""
    return User(
        id="65a1f0c2e4b0a1b2c3d4e5ff",
        username="intruder@example.com",
        name="Intruder",
        created_at=datetime(2024, 1, 1, 9, 0),
    )


@pytest_asyncio.fixture
async def app_client():
    """
    Create a test client with a clean test database.

    This fixture:
    - Skips the test when no MongoDB server is reachable
    - Points the app at a throwaway database with indexes in place
    - Yields an async HTTP client for testing
    - Drops the test database afterwards
    """
    test_client = AsyncIOMotorClient(settings.mongodb_url, serverSelectionTimeoutMS=1000)
    try:
        await test_client.admin.command("ping")
    except PyMongoError:
        test_client.close()
        pytest.skip("MongoDB is not reachable")

    test_db_name = f"{settings.mongodb_db_name}_test"
    test_db = test_client[test_db_name]
    await test_client.drop_database(test_db_name)
    await ensure_indexes(test_db)

    # Override the database dependency
    original_client, original_db = database.client, database.db
    database.client, database.db = test_client, test_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()
    await test_client.drop_database(test_db_name)

    database.client, database.db = original_client, original_db
    test_client.close()
