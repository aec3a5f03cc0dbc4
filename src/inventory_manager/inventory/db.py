from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator, Optional

from ..logging import get_logger
from .constants import SCHEMA_SQL


LOG = get_logger("db")


class InventoryError(Exception):
    """Base class for inventory failures that escape the repository."""


class DatabaseInitError(InventoryError):
    """The database file could not be opened or the schema not created."""


def ensure_schema(conn: sqlite3.Connection) -> None:
    """Create the products table if it does not exist yet."""
    LOG.info("Ensuring products table is present…")
    cur = conn.cursor()
    try:
        cur.executescript(SCHEMA_SQL)
        conn.commit()
    finally:
        cur.close()
    LOG.info("Table 'products' checked/created successfully.")


class InventoryDatabase:
    """Explicit handle on one SQLite connection for the whole session.

    - `open()` connects and ensures the schema; failures raise DatabaseInitError.
    - `cursor()` yields a cursor that is closed on every exit path.
    - Usable as a context manager that opens on enter and closes on exit.
    """

    def __init__(self, db_path: str, *, check_same_thread: bool = True) -> None:
        self.db_path = db_path
        self._check_same_thread = check_same_thread
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise InventoryError("Database is not open")
        return self._conn

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> "InventoryDatabase":
        if self._conn is not None:
            return self
        try:
            conn = sqlite3.connect(self.db_path, check_same_thread=self._check_same_thread)
        except sqlite3.Error as e:
            LOG.error(f"Can't open database {self.db_path}: {e}")
            raise DatabaseInitError(f"Can't open database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            ensure_schema(conn)
        except sqlite3.Error as e:
            conn.close()
            LOG.error(f"Failed to create products table: {e}")
            raise DatabaseInitError(f"Failed to create products table: {e}") from e
        self._conn = conn
        LOG.info(f"Opened database successfully: {self.db_path}")
        return self

    def close(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
        LOG.info("Database connection closed.")

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        cur = self.connection.cursor()
        try:
            yield cur
        finally:
            cur.close()

    def __enter__(self) -> "InventoryDatabase":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False
