"""
rps_wager.service — Game Service
================================

Caller-facing facade over the game record state machine. Every
mutating operation is one atomic load-validate-write against the
game store; listeners and the settlement ledger are told only after
the write has been committed.

Callers arrive with an already-verified identity string.

Usage:
    service = GameService()
    key = service.create_game("alice", 100).game_key
    service.join_game("bob", key)
    service.make_move("alice", key, "rock")
    service.make_move("bob", key, Move.SCISSORS)
"""

from __future__ import annotations
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Union

from ._config import ServiceConfig, load_config
from ._core import state_machine
from ._core.enums import GamePhase
from ._core.events import GameEvent
from ._core.record import GameRecord
from ._core.state_machine import Transition
from ._core.validation import require_caller
from ._shared.logging_config import log_rejection, setup_logging
from ._storage.keys import DEFAULT_KEY_SEED, derive_game_key, verify_key_proof
from ._storage.memory_store import InMemoryGameStore
from ._storage.repo_games import SqliteGameStore
from ._storage.store import GameStore
from .errors import GameNotFoundError, RpsWagerError, StorageKeyMismatchError
from .ledger import LoggingLedger, SettlementLedger, SettlementNotice
from .types import GameView

logger = logging.getLogger("rps_wager.service")

EventListener = Callable[[GameEvent], None]


class GameService:
    """
    Runs create/join/move/reset against a keyed game store.

    Attributes:
        store: Backing GameStore
        ledger: Collaborator notified of every finished round
        key_seed: Seed used to derive game keys
    """

    def __init__(
        self,
        store: Optional[GameStore] = None,
        ledger: Optional[SettlementLedger] = None,
        key_seed: str = DEFAULT_KEY_SEED,
        clock: Callable[[], float] = time.time,
        replace_finished: bool = True,
    ):
        self.store = store if store is not None else InMemoryGameStore()
        self.ledger = ledger if ledger is not None else LoggingLedger()
        self.key_seed = key_seed
        self.replace_finished = replace_finished
        self._clock = clock
        self._listeners: List[EventListener] = []

    # ── Listeners ───────────────────────────────────────────

    def add_listener(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ── Mutating operations ─────────────────────────────────

    def game_key_for(self, creator_id: str) -> str:
        """
        Derived storage key of creator_id's game.

        Raises:
            UnauthorizedCallerError: If creator_id is not a usable identity
        """
        require_caller(creator_id, "lookup")
        return derive_game_key(creator_id, self.key_seed).key

    def create_game(self, caller: str, bet_amount: int) -> GameRecord:
        """
        Create caller's game with a recorded stake.

        Raises:
            UnauthorizedCallerError: If caller is not a usable identity
            InvalidBetAmountError: If bet_amount is not an unsigned 64-bit int
            GameAlreadyExistsError: If caller already has an unfinished game
        """
        try:
            require_caller(caller, "create")
            derived = derive_game_key(caller, self.key_seed)
            transition = state_machine.create_game(
                caller, bet_amount, derived.key, derived.proof, self._now()
            )
            self.store.insert(transition.record, replace_finished=self.replace_finished)
            logger.info(
                f"[{transition.record.game_key}] Game created by {caller} "
                f"with bet amount: {transition.record.bet_amount}"
            )
        except RpsWagerError as e:
            log_rejection(e)
            raise
        self._publish(transition)
        return transition.record

    def join_game(self, caller: str, game_key: str) -> GameRecord:
        """
        Join game_key as the opponent.

        Raises:
            InvalidPhaseError, SelfPlayForbiddenError, GameNotFoundError
        """
        now = self._now()
        return self._apply(
            "join", caller, game_key,
            lambda record: state_machine.join_game(record, caller, now),
        )

    def make_move(self, caller: str, game_key: str, move: Any) -> GameRecord:
        """
        Commit caller's move; resolves the round when both moves are in.

        Raises:
            InvalidPhaseError, InvalidMoveError, MoveAlreadyMadeError,
            UnauthorizedCallerError, GameNotFoundError
        """
        now = self._now()
        return self._apply(
            "move", caller, game_key,
            lambda record: state_machine.make_move(record, caller, move, now),
        )

    def reset_game(self, caller: str, game_key: str) -> GameRecord:
        """
        Start a rematch on a finished game.

        Raises:
            InvalidPhaseError, UnauthorizedCallerError, GameNotFoundError
        """
        now = self._now()
        return self._apply(
            "reset", caller, game_key,
            lambda record: state_machine.reset_game(record, caller, now),
        )

    # ── Read operations ─────────────────────────────────────

    def get_game(self, game_key: str) -> GameRecord:
        """
        Load a verified record.

        Raises:
            GameNotFoundError: If no record exists under game_key
            StorageKeyMismatchError: If the record's key proof is invalid
        """
        record = self.store.get(game_key)
        if record is None:
            raise GameNotFoundError(game_key)
        self._check_proof(record)
        return record

    def find_game_by_creator(self, creator_id: str) -> Optional[GameRecord]:
        """Return creator_id's game, or None if they have none."""
        record = self.store.get(self.game_key_for(creator_id))
        if record is not None:
            self._check_proof(record)
        return record

    def list_games(self, phase: Optional[Union[GamePhase, str]] = None) -> List[GameRecord]:
        """All stored games, optionally filtered by phase."""
        if phase is None:
            return self.store.list_all()
        return self.store.list_by_phase(GamePhase(phase))

    def list_open_games(self) -> List[GameRecord]:
        """Games still waiting for an opponent."""
        return self.list_games(GamePhase.WAITING_FOR_OPPONENT)

    def view_game(self, game_key: str, viewer: Optional[str] = None) -> GameView:
        """Serializable view of a game with unrevealed moves hidden."""
        return self.get_game(game_key).view_for(viewer)

    # ── Internals ───────────────────────────────────────────

    def _now(self) -> int:
        return int(self._clock())

    def _apply(
        self,
        operation: str,
        caller: str,
        game_key: str,
        step: Callable[[GameRecord], Transition],
    ) -> GameRecord:
        def verified_step(record: GameRecord) -> Transition:
            self._check_proof(record)
            return step(record)

        try:
            require_caller(caller, operation, game_key=game_key)
            transition = self.store.mutate(game_key, verified_step)
            if transition is None:
                raise GameNotFoundError(game_key)
        except RpsWagerError as e:
            log_rejection(e)
            raise
        self._publish(transition)
        return transition.record

    def _check_proof(self, record: GameRecord) -> None:
        if not verify_key_proof(record.game_key, record.creator_id,
                                record.storage_key_proof, self.key_seed):
            raise StorageKeyMismatchError(record.game_key, record.creator_id)

    def _publish(self, transition: Transition) -> None:
        for event in transition.events:
            logger.debug(f"[{event.game_key}] Event {event.kind.value}")
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception:
                    logger.exception(
                        f"[{event.game_key}] Listener failed on {event.kind.value}"
                    )
        if transition.outcome is not None:
            record = transition.record
            self.ledger.on_round_finished(SettlementNotice(
                game_key=record.game_key,
                round_number=record.round_number,
                winner_id=record.winner_id,
                bet_amount=record.bet_amount,
                creator_id=record.creator_id,
                opponent_id=record.opponent_id,
            ))


def build_service(
    config: Optional[Union[ServiceConfig, Dict[str, Any]]] = None,
    ledger: Optional[SettlementLedger] = None,
    env_file: Optional[str] = None,
) -> GameService:
    """
    Wire logging, storage and ledger from configuration.

    Args:
        config: ServiceConfig, a plain dict, or None for env/defaults
        ledger: Settlement ledger; LoggingLedger when None
        env_file: Optional .env file read before the environment
    """
    if not isinstance(config, ServiceConfig):
        config = load_config(config, env_file=env_file)

    setup_logging(config.log_file, config.log_level)
    if config.db_path:
        store: GameStore = SqliteGameStore(config.db_path)
        logger.info(f"Using SQLite game store at {config.db_path}")
    else:
        store = InMemoryGameStore()
        logger.info("Using in-memory game store")
    return GameService(
        store=store,
        ledger=ledger,
        key_seed=config.key_seed,
        replace_finished=config.replace_finished,
    )
