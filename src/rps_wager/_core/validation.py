# Area: Core
"""
rps_wager._core.validation — Authorization and Validation
=========================================================

Stateless checks consulted before every mutation of a game record.
Each check raises the matching RpsWagerError and never touches the
record itself.
"""

from typing import Any

from pydantic import BaseModel, Field, StrictInt, ValidationError

from ..errors import (
    InvalidBetAmountError,
    InvalidMoveError,
    InvalidPhaseError,
    MoveAlreadyMadeError,
    SelfPlayForbiddenError,
    UnauthorizedCallerError,
)
from .enums import GameAction, GamePhase, Move
from .record import GameRecord

MAX_BET_AMOUNT = 2 ** 64 - 1


# Valid phase transitions: {current_phase: {action: next_phase}}
# MOVE lands in IN_PROGRESS until the second slot is filled, then FINISHED.
TRANSITIONS = {
    GamePhase.WAITING_FOR_OPPONENT: {
        GameAction.JOIN: GamePhase.IN_PROGRESS,
    },
    GamePhase.IN_PROGRESS: {
        GameAction.MOVE: GamePhase.FINISHED,
    },
    GamePhase.FINISHED: {
        GameAction.RESET: GamePhase.IN_PROGRESS,
    },
}

_REQUIRED_PHASE = {
    action: phase
    for phase, actions in TRANSITIONS.items()
    for action in actions
}


class BetParams(BaseModel):
    """Validated create_game parameters."""
    bet_amount: StrictInt = Field(ge=0, le=MAX_BET_AMOUNT)


def can_apply(phase: GamePhase, action: GameAction) -> bool:
    """Check if an action is allowed from the given phase."""
    return action in TRANSITIONS.get(phase, {})


def require_phase(record: GameRecord, action: GameAction, caller: str) -> None:
    """Raise InvalidPhaseError unless the record's phase allows action."""
    if not can_apply(record.phase, action):
        raise InvalidPhaseError(
            operation=action.value,
            phase=record.phase.value,
            expected=_REQUIRED_PHASE[action].value,
            game_key=record.game_key,
            caller=caller,
        )


def require_caller(caller: Any, operation: str, game_key: str = None) -> str:
    """Verified identities are non-empty strings."""
    if not isinstance(caller, str) or not caller.strip():
        raise UnauthorizedCallerError(caller, operation, game_key=game_key)
    return caller


def require_not_creator(record: GameRecord, caller: str) -> None:
    if caller == record.creator_id:
        raise SelfPlayForbiddenError(caller, game_key=record.game_key)


def require_participant(record: GameRecord, caller: str, operation: str) -> str:
    """Return the caller's slot or raise UnauthorizedCallerError."""
    slot = record.slot_of(caller)
    if slot is None:
        raise UnauthorizedCallerError(caller, operation, game_key=record.game_key)
    return slot


def require_empty_slot(record: GameRecord, caller: str, slot: str) -> None:
    if record.move_in(slot).is_set:
        raise MoveAlreadyMadeError(caller, slot, game_key=record.game_key)


def parse_move(value: Any, game_key: str = None, caller: str = None) -> Move:
    """
    Coerce a submitted move into a concrete Move.

    Raises:
        InvalidMoveError: If the value is unknown or UNSET
    """
    try:
        move = Move.parse(value)
    except ValueError:
        raise InvalidMoveError(value, game_key=game_key, caller=caller) from None
    if not move.is_set:
        raise InvalidMoveError(value, game_key=game_key, caller=caller)
    return move


def validate_bet_amount(bet_amount: Any, caller: str = None) -> int:
    """
    Validate an unsigned 64-bit stake.

    Raises:
        InvalidBetAmountError: If the amount is not an int in [0, 2**64-1]
    """
    try:
        return BetParams(bet_amount=bet_amount).bet_amount
    except ValidationError as e:
        reason = "; ".join(err["msg"] for err in e.errors())
        raise InvalidBetAmountError(bet_amount, reason, caller=caller) from None
