# tests/conftest.py
# Shared fixtures: isolated in-memory storage for every test.

import os

# Must be set before textshare.config is imported anywhere
os.environ.setdefault("STORAGE_URL", "sqlite://")

import pytest  # noqa: E402

from textshare.db.base import make_engine  # noqa: E402
from textshare.errors import PersistenceFailure  # noqa: E402
from textshare.repositories.history_repository import HistoryStore  # noqa: E402
from textshare.repositories.local_storage_repository import LocalStorage  # noqa: E402


class BrokenStorage(LocalStorage):
    """Storage whose every read and write fails, like a disabled local storage."""

    def __init__(self):
        super().__init__(engine=make_engine("sqlite://"))

    def get_item(self, key):
        raise PersistenceFailure("storage disabled")

    def set_item(self, key, value):
        raise PersistenceFailure("storage disabled")


@pytest.fixture
def storage():
    """A fresh in-memory key/value store."""
    engine = make_engine("sqlite://")
    yield LocalStorage(engine=engine)
    engine.dispose()


@pytest.fixture
def broken_storage():
    return BrokenStorage()


@pytest.fixture
def history_store(storage):
    store = HistoryStore(storage)
    store.load()
    return store
