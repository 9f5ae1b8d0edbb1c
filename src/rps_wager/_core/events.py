# Area: Core
"""
rps_wager._core.events — Game Events
====================================

Events emitted after each committed game operation. Event data never
carries an unrevealed move: MOVE_COMMITTED only names the slot that
was filled, the moves are published by GAME_RESOLVED.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class EventKind(Enum):
    """Kinds of events emitted by the game service."""
    GAME_CREATED = "GAME_CREATED"
    PLAYER_JOINED = "PLAYER_JOINED"
    MOVE_COMMITTED = "MOVE_COMMITTED"
    GAME_RESOLVED = "GAME_RESOLVED"
    GAME_RESET = "GAME_RESET"


@dataclass(frozen=True)
class GameEvent:
    """
    One committed change to a game record.

    Attributes:
        kind: What happened
        game_key: Key of the affected record
        caller: Identity that triggered the change
        round_number: Round the event belongs to
        timestamp: Unix timestamp of the operation
        data: Kind-specific payload
    """

    kind: EventKind
    game_key: str
    caller: Optional[str]
    round_number: int
    timestamp: int
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "game_key": self.game_key,
            "caller": self.caller,
            "round_number": self.round_number,
            "timestamp": self.timestamp,
            "data": dict(self.data),
        }
