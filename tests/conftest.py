"""Shared fixtures: in-memory storage and a store driven by a fixed clock."""

from datetime import datetime, timedelta, timezone

import pytest

from src.config import get_settings
from src.services.storage import InMemoryBlobStorage
from src.store import Store


FIXED_NOW = datetime(2024, 3, 15, 12, 0, 0, tzinfo=timezone.utc)
FIXED_NOW_MS = int(FIXED_NOW.timestamp() * 1000)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; make every test see its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(FIXED_NOW)


@pytest.fixture
def storage() -> InMemoryBlobStorage:
    return InMemoryBlobStorage()


@pytest.fixture
def store(storage, clock) -> Store:
    return Store(storage, clock=clock)


@pytest.fixture
def property_a() -> dict:
    return {
        "name": "A",
        "tenant": "T",
        "monthlyRent": 1000,
        "rentalDate": "2024-01-01",
        "paymentDate": 5,
        "status": "rented",
    }


@pytest.fixture
def make_property():
    """Build property input with overridable fields."""
    def _make(**overrides) -> dict:
        data = {
            "name": "Flat 1",
            "tenant": "Alice",
            "monthlyRent": 500,
            "rentalDate": "2023-06-01",
            "paymentDate": 1,
            "status": "rented",
        }
        data.update(overrides)
        return data
    return _make
