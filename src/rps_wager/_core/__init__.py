# Area: Core
"""
Core game logic: enums, move resolution, validation and the game record
state machine. Nothing in this package touches storage or I/O.
"""

from .enums import GameAction, GamePhase, Move, Outcome
from .events import EventKind, GameEvent
from .record import GameRecord
from .resolution import resolve
from .state_machine import Transition

__all__ = [
    "GameAction",
    "GamePhase",
    "Move",
    "Outcome",
    "EventKind",
    "GameEvent",
    "GameRecord",
    "resolve",
    "Transition",
]
