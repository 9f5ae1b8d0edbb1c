# Area: Shared Tests
"""Tests for the error hierarchy."""

import pytest
from rps_wager.errors import (
    GameAlreadyExistsError,
    GameNotFoundError,
    InvalidBetAmountError,
    InvalidMoveError,
    InvalidPhaseError,
    MoveAlreadyMadeError,
    RpsWagerError,
    SelfPlayForbiddenError,
    StorageKeyMismatchError,
    UnauthorizedCallerError,
)


class TestErrorHierarchy:
    """Every package error shares one base class and a stable code."""

    @pytest.mark.parametrize("error,code", [
        (InvalidPhaseError("join", "finished", "waiting_for_opponent"), "INVALID_GAME_STATE"),
        (SelfPlayForbiddenError("alice"), "CANNOT_PLAY_AGAINST_SELF"),
        (InvalidMoveError("lizard"), "INVALID_MOVE"),
        (MoveAlreadyMadeError("alice", "creator"), "MOVE_ALREADY_MADE"),
        (UnauthorizedCallerError("carol", "move"), "UNAUTHORIZED_PLAYER"),
        (InvalidBetAmountError(-1, "too small"), "INVALID_BET_AMOUNT"),
        (GameNotFoundError("game-x"), "GAME_NOT_FOUND"),
        (GameAlreadyExistsError("game-x", "alice", "in_progress"), "GAME_ALREADY_EXISTS"),
        (StorageKeyMismatchError("game-x", "alice"), "STORAGE_KEY_MISMATCH"),
    ])
    def test_codes(self, error, code):
        """Test each error carries its stable code."""
        assert isinstance(error, RpsWagerError)
        assert error.code == code


class TestErrorSerialization:
    """Tests for to_dict() and format_error_log()."""

    def test_invalid_phase_message(self):
        """Test InvalidPhaseError message and attributes."""
        error = InvalidPhaseError("join", "finished", "waiting_for_opponent",
                                  game_key="game-x", caller="carol")
        assert str(error) == "Cannot join while game is finished (requires waiting_for_opponent)"
        assert error.phase == "finished"

    def test_to_dict(self):
        """Test the serializable error payload."""
        error = MoveAlreadyMadeError("alice", "creator", game_key="game-x")
        payload = error.to_dict()
        assert payload["code"] == "MOVE_ALREADY_MADE"
        assert payload["error"] == "MoveAlreadyMadeError"
        assert payload["game_key"] == "game-x"
        assert payload["caller"] == "alice"
        assert payload["context"] == {"slot": "creator"}

    def test_format_error_log(self):
        """Test the boxed log block includes code, game and context."""
        error = UnauthorizedCallerError("carol", "reset", game_key="game-x")
        block = error.format_error_log()
        assert "GAME OPERATION REJECTED" in block
        assert "UNAUTHORIZED_PLAYER" in block
        assert "Game:         game-x" in block
        assert "Caller:       carol" in block
        assert '"operation": "reset"' in block

    def test_format_error_log_without_context(self):
        """Test the log block omits an empty context section."""
        block = SelfPlayForbiddenError("alice").format_error_log()
        assert "CONTEXT" not in block
        assert "Cannot play against yourself" in block
