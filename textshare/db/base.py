from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import MetaData, create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import StaticPool

from textshare import config


# Shared MetaData instance to be used by table models.
metadata: MetaData = MetaData()


def make_engine(url: str, echo: bool = False) -> Engine:
    """
    Create a synchronous engine for the local key/value store.

    In-memory SQLite URLs get a StaticPool so every connection sees the
    same database for the life of the engine.
    """
    kwargs = {"echo": echo, "future": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(url, **kwargs)


def init_storage(engine: Engine) -> None:
    """Create the storage tables if they do not exist yet."""
    # Import ensures the table is registered on metadata
    from textshare.models import local_storage_table  # noqa: F401

    metadata.create_all(engine)


# Echo is tied to DEBUG for easy SQL troubleshooting in dev.
engine: Engine = make_engine(config.STORAGE_URL, echo=config.DEBUG)


@contextmanager
def get_connection(bind: Engine | None = None) -> Iterator[Connection]:
    """Yield a connection inside a transaction committed on exit."""
    with (bind or engine).begin() as conn:
        yield conn
