# Area: Core
"""
rps_wager._core.enums — Game Enums
==================================

Defines the phases, moves, outcomes and actions used by the game
record state machine.
"""

from enum import Enum
from typing import Any


class GamePhase(Enum):
    """
    Lifecycle phase of a game record.

    Phase transitions:
    WAITING_FOR_OPPONENT -> IN_PROGRESS (on JOIN)
    IN_PROGRESS -> IN_PROGRESS (on MOVE, first slot filled)
    IN_PROGRESS -> FINISHED (on MOVE, both slots filled)
    FINISHED -> IN_PROGRESS (on RESET)
    """
    WAITING_FOR_OPPONENT = "waiting_for_opponent"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class Move(Enum):
    """A player's choice for one round. UNSET marks an empty move slot."""
    UNSET = "none"
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"

    @property
    def is_set(self) -> bool:
        return self is not Move.UNSET

    @property
    def label(self) -> str:
        return self.name.capitalize() if self.is_set else "None"

    @classmethod
    def parse(cls, value: Any) -> "Move":
        """
        Coerce a Move member or a case-insensitive name into a Move.

        Raises:
            ValueError: If the value does not name a move
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            for member in cls:
                if text in (member.value, member.name.lower()):
                    return member
        raise ValueError(f"Unknown move: {value!r}")


class Outcome(Enum):
    """Result of resolving two concrete moves."""
    PLAYER1_WINS = "player1_wins"
    PLAYER2_WINS = "player2_wins"
    DRAW = "draw"


class GameAction(Enum):
    """Operations that drive the game record state machine."""
    JOIN = "join"
    MOVE = "move"
    RESET = "reset"
