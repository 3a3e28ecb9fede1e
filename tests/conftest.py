"""Test configuration and fixtures"""

from datetime import datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from app.main import app
from app.database import get_db
from app.models.reservation import ReservationStore


# Fixed reference time; whole seconds so stored timestamps round-trip exactly
NOW = datetime(2026, 10, 18, 12, 0, 0)


class RecordingNotifier:
    """Notification manager double that keeps every alert it is given"""

    def __init__(self):
        self.sent = []

    async def notify(self, subject, message, is_error=False):
        self.sent.append((subject, message, is_error))

    @property
    def subjects(self):
        return [subject for subject, _, _ in self.sent]


class StatsStore(ReservationStore):
    """Store whose ``dbStats`` reports a chosen storage size"""

    def __init__(self, db, storage_mb: float, data_mb: float = 0, index_mb: float = 0):
        super().__init__(db)
        self.raw_stats = {
            "collections": 2,
            "views": 0,
            "objects": 0,
            "avgObjSize": 0,
            "dataSize": data_mb * 1024 * 1024,
            "storageSize": storage_mb * 1024 * 1024,
            "indexes": 4,
            "indexSize": index_mb * 1024 * 1024,
        }

    async def db_stats(self):
        return self.raw_stats


@pytest.fixture
def mongo_db():
    """In-memory MongoDB database"""
    return AsyncMongoMockClient()["xndoughs_test"]


@pytest.fixture
def store(mongo_db):
    return ReservationStore(mongo_db)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def add_reservation(store):
    """Insert a reservation created ``age`` before NOW"""

    async def _add(status="pending", age=timedelta(0), **fields):
        document = {
            "name": "Test Customer",
            "phone": "96170123456",
            "branch": "Clemenceau",
            "time": "8:00 PM",
            "status": status,
            "createdAt": NOW - age,
        }
        document.update(fields)
        return await store.create(document)

    return _add


@pytest.fixture
async def client(mongo_db):
    """Create test client with overridden database"""
    async def override_get_db():
        yield mongo_db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
