# Area: Storage
"""
rps_wager._storage.keys — Deterministic Game Key Derivation
===========================================================

A game's storage key is computed only from a fixed seed and the
creator's identity, so each creator owns exactly one key. The full
digest is kept on the record as its storage key proof.
"""

import hashlib
from dataclasses import dataclass

DEFAULT_KEY_SEED = "game"


@dataclass(frozen=True)
class GameKey:
    """A derived storage key and the digest proving its derivation."""

    key: str
    proof: str


def derive_game_key(creator_id: str, seed: str = DEFAULT_KEY_SEED) -> GameKey:
    """
    Derive the storage key for a creator's game.

    Args:
        creator_id: Verified identity of the creator
        seed: Namespace seed mixed into the digest

    Returns:
        GameKey with the short key and full proof digest
    """
    digest = hashlib.sha256(
        seed.encode("utf-8") + b"\x00" + creator_id.encode("utf-8")
    ).hexdigest()
    return GameKey(key=f"{seed}-{digest[:32]}", proof=digest)


def verify_key_proof(game_key: str, creator_id: str, proof: str,
                     seed: str = DEFAULT_KEY_SEED) -> bool:
    """Check that a stored key and proof both derive from creator_id."""
    expected = derive_game_key(creator_id, seed)
    return expected.key == game_key and expected.proof == proof
