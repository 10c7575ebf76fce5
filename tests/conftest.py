from datetime import datetime, timezone

import pytest

from venture_backend.app import create_app
from venture_backend.logging_config import reset_logging
from venture_backend.storage import CounterIds, Store
from venture_backend.timing import FixedClock

START = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def clock():
    return FixedClock(START)


@pytest.fixture
def store():
    return Store.memory()


@pytest.fixture
def app(store, clock):
    return create_app(
        {"TESTING": True, "STORAGE_BACKEND": "memory"},
        store=store,
        clock=clock,
        ids=CounterIds(),
    )


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sql_app(clock):
    return create_app(
        {
            "TESTING": True,
            "STORAGE_BACKEND": "sql",
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
        },
        clock=clock,
        ids=CounterIds(),
    )
