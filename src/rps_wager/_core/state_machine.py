# Area: Core
"""
rps_wager._core.state_machine — Game Record State Machine
=========================================================

Implements the lifecycle of a game record:

    WAITING_FOR_OPPONENT -> IN_PROGRESS -> FINISHED -> (IN_PROGRESS via reset)

Every function validates first and only then builds the next record,
so a rejected call returns nothing and the input record is untouched.
Persistence is left to the caller.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
import logging
from typing import List, Optional

from .enums import GameAction, GamePhase, Move, Outcome
from .events import EventKind, GameEvent
from .record import CREATOR_SLOT, GameRecord
from .resolution import describe, resolve
from . import validation

logger = logging.getLogger("rps_wager.core.state_machine")


@dataclass(frozen=True)
class Transition:
    """
    Result of a successful operation.

    Attributes:
        record: The new record to persist
        events: Events to publish once the record is persisted
        outcome: Round outcome when this operation resolved the round
    """

    record: GameRecord
    events: List[GameEvent] = field(default_factory=list)
    outcome: Optional[Outcome] = None


def create_game(
    caller: str,
    bet_amount: int,
    game_key: str,
    storage_key_proof: str,
    now: int,
) -> Transition:
    """
    Initialize a new record in WAITING_FOR_OPPONENT.

    Args:
        caller: Verified identity of the creator
        bet_amount: Stake recorded on the record
        game_key: Storage key derived from caller
        storage_key_proof: Proof of the key derivation
        now: Unix timestamp used for created_at
    """
    validation.require_caller(caller, "create", game_key=game_key)
    amount = validation.validate_bet_amount(bet_amount, caller=caller)
    record = GameRecord(
        game_key=game_key,
        creator_id=caller,
        bet_amount=amount,
        created_at=now,
        storage_key_proof=storage_key_proof,
    )
    event = _event(EventKind.GAME_CREATED, record, caller, now, bet_amount=amount)
    return Transition(record=record, events=[event])


def join_game(record: GameRecord, caller: str, now: int) -> Transition:
    """Seat caller as the opponent and start the first round."""
    validation.require_phase(record, GameAction.JOIN, caller)
    validation.require_not_creator(record, caller)

    joined = _advance(replace(record, opponent_id=caller), GamePhase.IN_PROGRESS)
    logger.info(f"[{record.game_key}] Player {caller} joined the game")
    event = _event(EventKind.PLAYER_JOINED, joined, caller, now)
    return Transition(record=joined, events=[event])


def make_move(record: GameRecord, caller: str, move: object, now: int) -> Transition:
    """
    Commit caller's move for the current round.

    Resolves the round and finishes the game once both slots are set.
    """
    validation.require_phase(record, GameAction.MOVE, caller)
    concrete = validation.parse_move(move, game_key=record.game_key, caller=caller)
    slot = validation.require_participant(record, caller, GameAction.MOVE.value)
    validation.require_empty_slot(record, caller, slot)

    if slot == CREATOR_SLOT:
        moved = replace(record, creator_move=concrete)
    else:
        moved = replace(record, opponent_move=concrete)
    logger.info(f"[{record.game_key}] {slot.capitalize()} made their move")
    events = [_event(EventKind.MOVE_COMMITTED, moved, caller, now, slot=slot)]

    if not moved.both_moves_set():
        return Transition(record=moved, events=events)

    finished, outcome = _resolve_round(moved)
    events.append(_event(
        EventKind.GAME_RESOLVED, finished, caller, now,
        outcome=outcome.value,
        creator_move=finished.creator_move.value,
        opponent_move=finished.opponent_move.value,
        winner_id=finished.winner_id,
        bet_amount=finished.bet_amount,
    ))
    return Transition(record=finished, events=events, outcome=outcome)


def reset_game(record: GameRecord, caller: str, now: int) -> Transition:
    """Clear round fields for a rematch between the same two players."""
    validation.require_phase(record, GameAction.RESET, caller)
    validation.require_participant(record, caller, GameAction.RESET.value)

    cleared = replace(
        record,
        creator_move=Move.UNSET,
        opponent_move=Move.UNSET,
        winner_id=None,
        round_number=record.round_number + 1,
    )
    cleared = _advance(cleared, GamePhase.IN_PROGRESS)
    logger.info(f"[{record.game_key}] Game reset for another round by {caller}")
    event = _event(EventKind.GAME_RESET, cleared, caller, now)
    return Transition(record=cleared, events=[event])


def _resolve_round(record: GameRecord):
    outcome = resolve(record.creator_move, record.opponent_move)
    if outcome is Outcome.PLAYER1_WINS:
        winner = record.creator_id
    elif outcome is Outcome.PLAYER2_WINS:
        winner = record.opponent_id
    else:
        winner = None
    logger.info(f"[{record.game_key}] " + describe(record.creator_move, record.opponent_move, outcome))
    finished = _advance(replace(record, winner_id=winner), GamePhase.FINISHED)
    return finished, outcome


def _advance(record: GameRecord, new_phase: GamePhase) -> GameRecord:
    if record.phase is not new_phase:
        logger.info(f"[{record.game_key}] Phase: {record.phase.value} → {new_phase.value}")
    return replace(record, phase=new_phase)


def _event(kind: EventKind, record: GameRecord, caller: str, now: int, **data) -> GameEvent:
    return GameEvent(
        kind=kind,
        game_key=record.game_key,
        caller=caller,
        round_number=record.round_number,
        timestamp=now,
        data=data,
    )
