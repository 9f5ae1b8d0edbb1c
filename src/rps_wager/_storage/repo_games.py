# Area: Storage
"""
rps_wager._storage.repo_games — Games Repository
================================================

SQLite-backed game store. Each mutation runs inside a single
BEGIN IMMEDIATE transaction, giving per-key atomic read-modify-write.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from .._core.enums import GamePhase
from .._core.record import GameRecord
from .._core.state_machine import Transition
from .database import BaseRepository
from .store import Mutator, check_supersede

logger = logging.getLogger("rps_wager.storage.repo_games")

_COLUMNS = (
    "game_key", "creator_id", "opponent_id", "bet_amount", "phase",
    "creator_move", "opponent_move", "winner_id", "round_number",
    "created_at", "storage_key_proof",
)

_UPSERT = f"""
    INSERT OR REPLACE INTO games ({", ".join(_COLUMNS)})
    VALUES ({", ".join("?" for _ in _COLUMNS)})
"""


class SqliteGameStore(BaseRepository):
    """
    Repository for the games table.

    Handles inserting, loading, mutating and listing game records.
    """

    def __init__(self, db_path: str = "rps_wager.db", initialize: bool = True):
        """
        Initialize repository.

        Args:
            db_path: Path to the SQLite database file, or ":memory:" for
                a private database that lives as long as this store
            initialize: If True, apply the schema on construction
        """
        super().__init__(db_path)
        if initialize or self.in_memory:
            self.initialize()

    def insert(self, record: GameRecord, replace_finished: bool = True) -> Optional[GameRecord]:
        """
        Save a new game record, superseding a FINISHED one if allowed.

        Args:
            record: Freshly created record
            replace_finished: Allow replacing a FINISHED record

        Returns:
            The superseded record, or None
        """
        with self._transaction() as conn:
            existing = self._load(conn, record.game_key)
            check_supersede(existing, record, replace_finished)
            conn.execute(_UPSERT, _params(record))
        if existing is not None:
            logger.info(f"[{record.game_key}] Superseded finished game")
        return existing

    def get(self, game_key: str) -> Optional[GameRecord]:
        """
        Get a game by key.

        Args:
            game_key: Derived game key to look up

        Returns:
            GameRecord or None if not found
        """
        row = self._fetch_one("SELECT * FROM games WHERE game_key = ?", (game_key,))
        return GameRecord.from_row(row) if row else None

    def mutate(self, game_key: str, fn: Mutator) -> Optional[Transition]:
        """Load, transform and save one record in a single transaction."""
        with self._transaction() as conn:
            current = self._load(conn, game_key)
            if current is None:
                return None
            transition = fn(current)
            conn.execute(_UPSERT, _params(transition.record))
        return transition

    def list_all(self) -> List[GameRecord]:
        """
        Get all games.

        Returns:
            List of all game records, oldest first
        """
        rows = self._fetch_all("SELECT * FROM games ORDER BY created_at, game_key")
        return [GameRecord.from_row(row) for row in rows]

    def list_by_phase(self, phase: GamePhase) -> List[GameRecord]:
        """Get all games in one phase, oldest first."""
        rows = self._fetch_all(
            "SELECT * FROM games WHERE phase = ? ORDER BY created_at, game_key",
            (phase.value,),
        )
        return [GameRecord.from_row(row) for row in rows]

    @staticmethod
    def _load(conn: sqlite3.Connection, game_key: str) -> Optional[GameRecord]:
        row = conn.execute("SELECT * FROM games WHERE game_key = ?", (game_key,)).fetchone()
        return GameRecord.from_row(dict(row)) if row else None


def _params(record: GameRecord) -> tuple:
    row: Dict[str, Any] = record.to_row()
    # Stakes span the full unsigned 64-bit range, wider than SQLite INTEGER.
    row["bet_amount"] = str(row["bet_amount"])
    return tuple(row[col] for col in _COLUMNS)
