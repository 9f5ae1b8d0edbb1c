# Area: Storage
"""
rps_wager._storage.store — Game Store Interface
===============================================

The contract every backing store honours: one record per key,
insert-if-absent creation, and atomic read-modify-write per key.
"""

from typing import Callable, List, Optional, Protocol

from .._core.enums import GamePhase
from .._core.record import GameRecord
from .._core.state_machine import Transition
from ..errors import GameAlreadyExistsError

Mutator = Callable[[GameRecord], Transition]


class GameStore(Protocol):
    """Keyed game record storage with single-writer-per-key semantics."""

    def insert(self, record: GameRecord, replace_finished: bool = True) -> Optional[GameRecord]:
        """
        Store a new record under record.game_key.

        Returns the superseded FINISHED record, if one was replaced.

        Raises:
            GameAlreadyExistsError: If the key holds a record that may
                not be superseded
        """
        ...

    def get(self, game_key: str) -> Optional[GameRecord]:
        ...

    def mutate(self, game_key: str, fn: Mutator) -> Optional[Transition]:
        """
        Atomically load, transform and save one record.

        fn receives the current record and returns the Transition to
        persist. If fn raises, nothing is written. Returns None when no
        record exists under game_key.
        """
        ...

    def list_all(self) -> List[GameRecord]:
        """All records, oldest first."""
        ...

    def list_by_phase(self, phase: GamePhase) -> List[GameRecord]:
        """Records in one phase, oldest first."""
        ...


def check_supersede(existing: Optional[GameRecord], incoming: GameRecord,
                    replace_finished: bool) -> None:
    """Raise unless incoming may take the slot held by existing."""
    if existing is None:
        return
    if replace_finished and existing.phase is GamePhase.FINISHED:
        return
    raise GameAlreadyExistsError(
        existing.game_key, incoming.creator_id, existing.phase.value
    )
