"""
rps_wager — Wagered Rock-Paper-Scissors Game Records
====================================================

Two-player Rock-Paper-Scissors matches with a recorded stake, kept as
one shared record per creator that both players mutate across
separate calls.

Quick Start:
    from rps_wager import GameService, Move
    service = GameService()
    game = service.create_game("alice", bet_amount=100)
    service.join_game("bob", game.game_key)
    service.make_move("alice", game.game_key, Move.ROCK)
    result = service.make_move("bob", game.game_key, "scissors")
    result.winner_id   # "alice"

Configured setup (SQLite storage, JSON log file):
    from rps_wager import build_service
    service = build_service({"db_path": "games.db", "log_file": "rps.log"})

Lifecycle
---------
    WAITING_FOR_OPPONENT --join--> IN_PROGRESS --both moves--> FINISHED
    FINISHED --reset--> IN_PROGRESS   (rematch, same two players)

Moves stay hidden until both players have committed; use
GameService.view_game(game_key, viewer) for a per-player view.
"""

from ._core.enums import GameAction, GamePhase, Move, Outcome
from ._core.events import EventKind, GameEvent
from ._core.record import GameRecord
from ._core.resolution import resolve
from ._config import ServiceConfig, load_config
from ._shared.logging_config import setup_logging
from ._storage.keys import GameKey, derive_game_key
from ._storage.memory_store import InMemoryGameStore
from ._storage.repo_games import SqliteGameStore
from ._storage.store import GameStore
from .errors import (
    RpsWagerError,
    InvalidPhaseError,
    SelfPlayForbiddenError,
    InvalidMoveError,
    MoveAlreadyMadeError,
    UnauthorizedCallerError,
    InvalidBetAmountError,
    GameNotFoundError,
    GameAlreadyExistsError,
    StorageKeyMismatchError,
)
from .ledger import LoggingLedger, RecordingLedger, SettlementLedger, SettlementNotice
from .service import GameService, build_service
from .types import ErrorPayload, EventPayload, GameView, MoveSlotView

__all__ = [
    # Main classes
    "GameService",
    "build_service",
    "ServiceConfig",
    "load_config",
    "setup_logging",
    # Game model
    "GameRecord",
    "GamePhase",
    "GameAction",
    "Move",
    "Outcome",
    "resolve",
    "EventKind",
    "GameEvent",
    # Storage
    "GameStore",
    "InMemoryGameStore",
    "SqliteGameStore",
    "GameKey",
    "derive_game_key",
    # Ledger
    "SettlementLedger",
    "SettlementNotice",
    "LoggingLedger",
    "RecordingLedger",
    # Errors
    "RpsWagerError",
    "InvalidPhaseError",
    "SelfPlayForbiddenError",
    "InvalidMoveError",
    "MoveAlreadyMadeError",
    "UnauthorizedCallerError",
    "InvalidBetAmountError",
    "GameNotFoundError",
    "GameAlreadyExistsError",
    "StorageKeyMismatchError",
    # Serialized views
    "GameView",
    "MoveSlotView",
    "EventPayload",
    "ErrorPayload",
]
__version__ = "1.0.0"
