"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.db.session import make_engine
from app.storage.database import DatabaseStorage
from app.storage.memory import MemoryStorage
from app.storage.seed import seed_demo_data


class FakeClock:
    """Deterministic replacement for the storage clock."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc))


def _make_storage(backend, clock):
    if backend == "memory":
        return MemoryStorage(clock=clock)
    return DatabaseStorage.from_engine(make_engine("sqlite://"), clock=clock)


@pytest.fixture(params=["memory", "database"])
def empty_storage(request, clock):
    """A storage of each backend with nothing in it."""
    return _make_storage(request.param, clock)


@pytest.fixture
def storage(empty_storage):
    """A storage of each backend loaded with the demo data."""
    seed_demo_data(empty_storage)
    return empty_storage


@pytest.fixture
def memory_storage(clock):
    s = MemoryStorage(clock=clock)
    seed_demo_data(s)
    return s


@pytest.fixture
def client(memory_storage):
    from main import create_app
    return TestClient(create_app(storage=memory_storage))


@pytest.fixture
def sample_inventory():
    return {
        "type": "plant",
        "name": "Oak Saplings",
        "quantity": 300,
        "unit": "units",
        "status": "available",
    }


@pytest.fixture
def sample_task(clock):
    return {
        "title": "Firebreak inspection",
        "description": "Walk the southern firebreak and log damage",
        "location": "South Region",
        "priority": "high",
        "category": "monitoring",
        "assignedTo": 3,
        "scheduledDate": (clock.now + timedelta(days=2)).isoformat(),
    }
