"""
rps_wager.errors — Custom exception classes
===========================================

Defines the exception hierarchy for rejected game operations.
Each exception stores full context for structured logging and carries
a stable ``code`` that callers can relay to clients.

A rejected operation never mutates the game record.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import json


class RpsWagerError(Exception):
    """Base exception for all rps_wager package errors."""

    code = "RPS_WAGER_ERROR"

    def __init__(self, message: str, game_key: Optional[str] = None,
                 caller: Optional[str] = None, **context: Any):
        self.game_key = game_key
        self.caller = caller
        self.context = context
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form of the error for relaying to clients."""
        return {
            "code": self.code,
            "error": self.__class__.__name__,
            "message": str(self),
            "game_key": self.game_key,
            "caller": self.caller,
            "context": dict(self.context),
        }

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type=self.code,
            message=str(self),
            game_key=self.game_key,
            caller=self.caller,
            context=self.context,
        )


# ── Game rule violations ─────────────────────────────────────

class InvalidPhaseError(RpsWagerError):
    """Raised when the record's phase forbids the requested operation."""

    code = "INVALID_GAME_STATE"

    def __init__(self, operation: str, phase: str, expected: str,
                 game_key: Optional[str] = None, caller: Optional[str] = None):
        self.operation = operation
        self.phase = phase
        self.expected = expected
        super().__init__(
            f"Cannot {operation} while game is {phase} (requires {expected})",
            game_key=game_key, caller=caller,
            operation=operation, phase=phase, expected=expected,
        )


class SelfPlayForbiddenError(RpsWagerError):
    """Raised when the creator tries to join their own game."""

    code = "CANNOT_PLAY_AGAINST_SELF"

    def __init__(self, caller: str, game_key: Optional[str] = None):
        super().__init__(
            "Cannot play against yourself",
            game_key=game_key, caller=caller,
        )


class InvalidMoveError(RpsWagerError):
    """Raised when an unset, placeholder or unknown move is submitted."""

    code = "INVALID_MOVE"

    def __init__(self, move: Any, game_key: Optional[str] = None,
                 caller: Optional[str] = None):
        self.move = move
        super().__init__(
            f"Invalid move: {move!r}",
            game_key=game_key, caller=caller, move=repr(move),
        )


class MoveAlreadyMadeError(RpsWagerError):
    """Raised when the caller's move slot already holds a move this round."""

    code = "MOVE_ALREADY_MADE"

    def __init__(self, caller: str, slot: str, game_key: Optional[str] = None):
        self.slot = slot
        super().__init__(
            "Move already made by this player",
            game_key=game_key, caller=caller, slot=slot,
        )


class UnauthorizedCallerError(RpsWagerError):
    """Raised when the caller is not a participant of the game."""

    code = "UNAUTHORIZED_PLAYER"

    def __init__(self, caller: Any, operation: str,
                 game_key: Optional[str] = None):
        self.operation = operation
        super().__init__(
            f"Unauthorized player for {operation}",
            game_key=game_key, caller=caller, operation=operation,
        )


class InvalidBetAmountError(RpsWagerError):
    """Raised when a bet amount is not an unsigned 64-bit integer."""

    code = "INVALID_BET_AMOUNT"

    def __init__(self, bet_amount: Any, reason: str,
                 caller: Optional[str] = None):
        self.bet_amount = bet_amount
        super().__init__(
            f"Invalid bet amount {bet_amount!r}: {reason}",
            caller=caller, bet_amount=repr(bet_amount),
        )


# ── Storage boundary ─────────────────────────────────────────

class GameNotFoundError(RpsWagerError):
    """Raised when no record exists under a game key."""

    code = "GAME_NOT_FOUND"

    def __init__(self, game_key: str):
        super().__init__(f"Game not found: {game_key}", game_key=game_key)


class GameAlreadyExistsError(RpsWagerError):
    """Raised when a creator already owns an unfinished game."""

    code = "GAME_ALREADY_EXISTS"

    def __init__(self, game_key: str, caller: str, phase: str):
        self.phase = phase
        super().__init__(
            "You already have an active game. Finish or reset it first.",
            game_key=game_key, caller=caller, phase=phase,
        )


class StorageKeyMismatchError(RpsWagerError):
    """Raised when a record's key proof does not derive from its creator."""

    code = "STORAGE_KEY_MISMATCH"

    def __init__(self, game_key: str, creator_id: str):
        super().__init__(
            f"Record at {game_key} is not derived from creator {creator_id}",
            game_key=game_key, creator_id=creator_id,
        )


def _format_error_block(
    error_type: str,
    message: str,
    game_key: Optional[str],
    caller: Optional[str],
    context: Dict[str, Any],
) -> str:
    """Format a structured error block for logs."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " GAME OPERATION REJECTED",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Message:      {message}",
    ]

    if game_key is not None:
        lines.append(f" Game:         {game_key}")
    if caller is not None:
        lines.append(f" Caller:       {caller}")

    if context:
        lines.append("")
        lines.append(" ── CONTEXT " + "─" * 52)
        lines.append(_indent_json(context))

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
