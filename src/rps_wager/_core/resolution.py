# Area: Core
"""
rps_wager._core.resolution — Move Resolution
============================================

Pure round resolution using the standard cyclic dominance:
Rock beats Scissors, Scissors beats Paper, Paper beats Rock.
"""

from .enums import Move, Outcome


# {move: the move it beats}
BEATS = {
    Move.ROCK: Move.SCISSORS,
    Move.SCISSORS: Move.PAPER,
    Move.PAPER: Move.ROCK,
}


def resolve(move1: Move, move2: Move) -> Outcome:
    """
    Resolve a round between player 1 and player 2.

    Args:
        move1: Player 1's concrete move
        move2: Player 2's concrete move

    Returns:
        The round outcome from player 1's perspective

    Raises:
        ValueError: If either move is UNSET
    """
    if move1 not in BEATS or move2 not in BEATS:
        raise ValueError(f"Cannot resolve unset move: {move1.label} vs {move2.label}")
    if move1 is move2:
        return Outcome.DRAW
    if BEATS[move1] is move2:
        return Outcome.PLAYER1_WINS
    return Outcome.PLAYER2_WINS


def describe(move1: Move, move2: Move, outcome: Outcome) -> str:
    """Human-readable summary of a resolved round."""
    if outcome is Outcome.PLAYER1_WINS:
        return f"Player 1 wins! {move1.label} beats {move2.label}"
    if outcome is Outcome.PLAYER2_WINS:
        return f"Player 2 wins! {move2.label} beats {move1.label}"
    return f"It's a draw! Both players chose {move1.label}"
