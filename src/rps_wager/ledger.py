"""
rps_wager.ledger — Settlement ledger collaborator
=================================================

The game core records a stake but never moves funds. When a round
finishes, the service hands a SettlementNotice to a ledger; moving
the stake (escrow, payout, refund on draw) is the ledger's business.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import List, Optional, Protocol

logger = logging.getLogger("rps_wager.ledger")


@dataclass(frozen=True)
class SettlementNotice:
    """
    A finished round that a ledger may settle.

    Attributes:
        game_key: Key of the finished game
        round_number: Round that finished
        winner_id: Winning identity, None on a draw
        bet_amount: Stake recorded on the game
        creator_id: Creator identity
        opponent_id: Opponent identity
    """

    game_key: str
    round_number: int
    winner_id: Optional[str]
    bet_amount: int
    creator_id: str
    opponent_id: str

    @property
    def is_draw(self) -> bool:
        return self.winner_id is None


class SettlementLedger(Protocol):
    """Receives one notice per finished round."""

    def on_round_finished(self, notice: SettlementNotice) -> None:
        ...


class LoggingLedger:
    """Default ledger: records the notice in the log and moves nothing."""

    def on_round_finished(self, notice: SettlementNotice) -> None:
        if notice.is_draw:
            logger.info(
                f"[{notice.game_key}] Round {notice.round_number} drawn; "
                f"stake {notice.bet_amount} left unsettled"
            )
        else:
            logger.info(
                f"[{notice.game_key}] Round {notice.round_number} won by "
                f"{notice.winner_id}; stake {notice.bet_amount} left unsettled"
            )


class RecordingLedger:
    """Ledger that keeps every notice in memory, for tests and audits."""

    def __init__(self):
        self.notices: List[SettlementNotice] = []

    def on_round_finished(self, notice: SettlementNotice) -> None:
        self.notices.append(notice)
