# Area: Core
"""
rps_wager._core.record — Game Record
====================================

The persistent value holding one match's full state. Records are
frozen: every transition produces a new record, so a rejected
operation can never leave a half-written record behind.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from .enums import GamePhase, Move

if TYPE_CHECKING:
    from ..types import GameView, MoveSlotView

CREATOR_SLOT = "creator"
OPPONENT_SLOT = "opponent"


@dataclass(frozen=True)
class GameRecord:
    """
    Full state of one wagered match between a creator and an opponent.

    Attributes:
        game_key: Storage key derived from creator_id
        creator_id: Identity of the player who created the game
        bet_amount: Stake recorded for the match (never moved here)
        created_at: Unix timestamp of creation
        storage_key_proof: Proof that game_key derives from creator_id
        opponent_id: Identity of the joined player, None until joined
        phase: Current lifecycle phase
        creator_move: Creator's move slot for the current round
        opponent_move: Opponent's move slot for the current round
        winner_id: Winner of the last resolved round, None for no winner or draw
        round_number: 1-based round counter, bumped by each reset
    """

    game_key: str
    creator_id: str
    bet_amount: int
    created_at: int
    storage_key_proof: str
    opponent_id: Optional[str] = None
    phase: GamePhase = GamePhase.WAITING_FOR_OPPONENT
    creator_move: Move = Move.UNSET
    opponent_move: Move = Move.UNSET
    winner_id: Optional[str] = None
    round_number: int = 1

    # ── Participant helpers ─────────────────────────────────

    def slot_of(self, caller: str) -> Optional[str]:
        """Return the move slot owned by caller, or None for outsiders."""
        if caller == self.creator_id:
            return CREATOR_SLOT
        if self.opponent_id is not None and caller == self.opponent_id:
            return OPPONENT_SLOT
        return None

    def is_participant(self, caller: str) -> bool:
        return self.slot_of(caller) is not None

    def move_in(self, slot: str) -> Move:
        return self.creator_move if slot == CREATOR_SLOT else self.opponent_move

    def both_moves_set(self) -> bool:
        return self.creator_move.is_set and self.opponent_move.is_set

    @property
    def is_draw(self) -> bool:
        return self.phase is GamePhase.FINISHED and self.winner_id is None

    # ── Serialization ──────────────────────────────────────

    def to_row(self) -> Dict[str, Any]:
        """Flatten to a storage row with enums stored by value."""
        row = asdict(self)
        row["phase"] = self.phase.value
        row["creator_move"] = self.creator_move.value
        row["opponent_move"] = self.opponent_move.value
        return row

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "GameRecord":
        """Rebuild a record from a storage row."""
        return cls(
            game_key=row["game_key"],
            creator_id=row["creator_id"],
            bet_amount=int(row["bet_amount"]),
            created_at=int(row["created_at"]),
            storage_key_proof=row["storage_key_proof"],
            opponent_id=row.get("opponent_id"),
            phase=GamePhase(row["phase"]),
            creator_move=Move(row["creator_move"]),
            opponent_move=Move(row["opponent_move"]),
            winner_id=row.get("winner_id"),
            round_number=int(row.get("round_number", 1)),
        )

    def view_for(self, viewer: Optional[str]) -> "GameView":
        """
        Build a serializable view for one viewer.

        Moves stay hidden until both are committed: before the game is
        finished only the viewer's own move is revealed, the other slot
        reports just whether it has been committed.
        """
        viewer_slot = self.slot_of(viewer) if viewer is not None else None
        revealed = self.phase is GamePhase.FINISHED
        return {
            "game_key": self.game_key,
            "creator_id": self.creator_id,
            "opponent_id": self.opponent_id,
            "bet_amount": self.bet_amount,
            "phase": self.phase.value,
            "round_number": self.round_number,
            "created_at": self.created_at,
            "winner_id": self.winner_id,
            "is_draw": self.is_draw,
            "viewer_slot": viewer_slot,
            "creator_move": _slot_view(self.creator_move, revealed or viewer_slot == CREATOR_SLOT),
            "opponent_move": _slot_view(self.opponent_move, revealed or viewer_slot == OPPONENT_SLOT),
        }


def _slot_view(move: Move, visible: bool) -> "MoveSlotView":
    return {
        "committed": move.is_set,
        "move": move.value if visible and move.is_set else None,
    }
