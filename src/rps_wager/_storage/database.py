# Area: Storage
"""
rps_wager._storage.database — Database Connections
==================================================

SQLite connection management for game record persistence.

File databases get a fresh connection per operation. The special
":memory:" path lives only as long as its connection, so a repository
opened on it keeps one shared connection guarded by a lock.
"""

import sqlite3
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

logger = logging.getLogger("rps_wager.storage.database")

# Path to schema file
SCHEMA_PATH = Path(__file__).parent / "schema.sql"

MEMORY_PATH = ":memory:"


def get_connection(db_path: str = "rps_wager.db") -> sqlite3.Connection:
    """
    Open a database connection in autocommit mode.

    Transactions are started explicitly with BEGIN, so the sqlite3
    module never opens one implicitly.

    Args:
        db_path: Path to the SQLite database file, or ":memory:"

    Returns:
        SQLite connection with row factory set
    """
    conn = sqlite3.connect(db_path, isolation_level=None, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


def init_database(conn: sqlite3.Connection) -> None:
    """Apply the schema on an open connection."""
    with open(SCHEMA_PATH, "r") as f:
        conn.executescript(f.read())


class BaseRepository:
    """
    Base class for database repositories.

    Attributes:
        db_path: SQLite file path, or ":memory:" for a private database
    """

    def __init__(self, db_path: str = "rps_wager.db"):
        self.db_path = db_path
        self._shared: Optional[sqlite3.Connection] = None
        self._shared_lock = threading.Lock()
        if db_path == MEMORY_PATH:
            self._shared = get_connection(db_path)

    @property
    def in_memory(self) -> bool:
        return self._shared is not None

    def initialize(self) -> None:
        """Create the schema if it does not exist yet."""
        with self._connection() as conn:
            init_database(conn)
        logger.info(f"Database initialized at {self.db_path}")

    def close(self) -> None:
        """Release the shared in-memory connection, discarding its data."""
        if self._shared is not None:
            self._shared.close()
            self._shared = None

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        if self._shared is not None:
            with self._shared_lock:
                yield self._shared
            return
        conn = get_connection(self.db_path)
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Run a block inside one write-locked transaction.

        BEGIN IMMEDIATE takes the database write lock up front, so a
        read-modify-write inside the block cannot interleave with
        another writer. Any exception rolls the whole block back.
        """
        with self._connection() as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")

    def _fetch_all(self, query: str, params: tuple = ()) -> List[dict]:
        with self._connection() as conn:
            return [dict(row) for row in conn.execute(query, params).fetchall()]

    def _fetch_one(self, query: str, params: tuple = ()) -> Optional[dict]:
        with self._connection() as conn:
            row = conn.execute(query, params).fetchone()
        return dict(row) if row else None
