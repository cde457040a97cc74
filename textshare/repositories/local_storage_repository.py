# textshare/repositories/local_storage_repository.py
# Named-key string storage with the get/set contract of browser local storage

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from textshare.db.base import get_connection, init_storage
from textshare.errors import PersistenceFailure
from textshare.models.local_storage_table import local_storage


class LocalStorage:
    """Repository for key/value persistence."""

    def __init__(self, engine: Engine | None = None):
        if engine is None:
            from textshare.db.base import engine as default_engine
            engine = default_engine
        self.engine = engine
        self._ready = False

    def _ensure_schema(self) -> None:
        if not self._ready:
            init_storage(self.engine)
            self._ready = True

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key was never set."""
        try:
            self._ensure_schema()
            with get_connection(self.engine) as conn:
                result = conn.execute(
                    select(local_storage.c.value).where(local_storage.c.key == key)
                )
                row = result.fetchone()
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Failed to read key {key!r}", details={"reason": str(e)}) from e
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        now = datetime.now(timezone.utc)
        try:
            self._ensure_schema()
            with get_connection(self.engine) as conn:
                # update first, insert when the key is new
                result = conn.execute(
                    local_storage.update()
                    .where(local_storage.c.key == key)
                    .values(value=value, updated_at=now)
                )
                if result.rowcount == 0:
                    conn.execute(
                        local_storage.insert().values(key=key, value=value, updated_at=now)
                    )
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Failed to write key {key!r}", details={"reason": str(e)}) from e

    def ping(self) -> bool:
        """Return True if the store answers a trivial read."""
        self.get_item("__ping__")
        return True
