# Area: Storage
"""
Storage collaborators for game records: key derivation, the GameStore
contract and its in-memory and SQLite implementations.
"""

from .keys import GameKey, derive_game_key, verify_key_proof
from .memory_store import InMemoryGameStore
from .repo_games import SqliteGameStore
from .store import GameStore

__all__ = [
    "GameKey",
    "derive_game_key",
    "verify_key_proof",
    "InMemoryGameStore",
    "SqliteGameStore",
    "GameStore",
]
