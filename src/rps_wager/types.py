"""
rps_wager.types — TypedDict schemas for serialized views
========================================================

Documents the exact structure of the dictionaries returned by
GameService.view_game(), GameEvent.to_dict() and
RpsWagerError.to_dict().

All types are exported from the main package:

    from rps_wager import GameView, MoveSlotView, ...
"""

from typing import Any, Dict, Literal, Optional, TypedDict


class MoveSlotView(TypedDict):
    """One player's move slot as seen by a viewer.

    Fields
    ------
    committed : bool
        True once the slot holds a move for this round.
    move : str or None
        "rock", "paper" or "scissors" when visible to the viewer,
        otherwise None. Visible for the viewer's own slot, and for
        both slots once the game is finished.
    """
    committed: bool
    move: Optional[str]


class GameView(TypedDict):
    """Serialized game state for one viewer.

    Fields
    ------
    phase : str
        "waiting_for_opponent", "in_progress" or "finished".
    winner_id : str or None
        Winner of the last resolved round; None while unresolved or on a draw.
    viewer_slot : str or None
        "creator", "opponent", or None for non-participants.
    """
    game_key: str
    creator_id: str
    opponent_id: Optional[str]
    bet_amount: int
    phase: Literal["waiting_for_opponent", "in_progress", "finished"]
    round_number: int
    created_at: int
    winner_id: Optional[str]
    is_draw: bool
    viewer_slot: Optional[Literal["creator", "opponent"]]
    creator_move: MoveSlotView
    opponent_move: MoveSlotView


class EventPayload(TypedDict):
    """Serialized GameEvent."""
    kind: str               # e.g., "GAME_RESOLVED"
    game_key: str
    caller: Optional[str]
    round_number: int
    timestamp: int
    data: Dict[str, Any]


class ErrorPayload(TypedDict):
    """Serialized RpsWagerError."""
    code: str               # e.g., "MOVE_ALREADY_MADE"
    error: str              # exception class name
    message: str
    game_key: Optional[str]
    caller: Optional[str]
    context: Dict[str, Any]
