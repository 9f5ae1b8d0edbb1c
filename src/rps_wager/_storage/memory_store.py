# Area: Storage
"""
rps_wager._storage.memory_store — In-memory game store
======================================================

Process-local store for tests and single-process deployments.
A per-key lock serializes mutations of the same record while
different records stay independent.
"""

import threading
from collections import defaultdict
from typing import Dict, List, Optional

from .._core.enums import GamePhase
from .._core.record import GameRecord
from .._core.state_machine import Transition
from .store import Mutator, check_supersede


class InMemoryGameStore:
    """Dictionary-backed GameStore."""

    def __init__(self):
        self._games: Dict[str, GameRecord] = {}
        self._locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._registry_lock = threading.Lock()

    def _lock_for(self, game_key: str) -> threading.Lock:
        with self._registry_lock:
            return self._locks[game_key]

    def insert(self, record: GameRecord, replace_finished: bool = True) -> Optional[GameRecord]:
        with self._lock_for(record.game_key):
            existing = self._games.get(record.game_key)
            check_supersede(existing, record, replace_finished)
            self._games[record.game_key] = record
            return existing

    def get(self, game_key: str) -> Optional[GameRecord]:
        return self._games.get(game_key)

    def mutate(self, game_key: str, fn: Mutator) -> Optional[Transition]:
        with self._lock_for(game_key):
            current = self._games.get(game_key)
            if current is None:
                return None
            transition = fn(current)
            self._games[game_key] = transition.record
            return transition

    def list_all(self) -> List[GameRecord]:
        return sorted(self._games.values(), key=lambda g: (g.created_at, g.game_key))

    def list_by_phase(self, phase: GamePhase) -> List[GameRecord]:
        return [g for g in self.list_all() if g.phase is phase]
