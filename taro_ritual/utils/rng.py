"""Random draw utilities for unbiased, reproducible card sampling."""

import hashlib
import random
import uuid
from typing import Any, Dict, List, Protocol, Sequence, TypeVar

T = TypeVar("T")

# A card is reversed when its coin-flip lands strictly above this value (~30%).
REVERSAL_THRESHOLD = 0.7


class RandomSource(Protocol):
    def random(self) -> float: ...


def seeded_random(seed: str, salt: str = "") -> random.Random:
    """Create a deterministic random.Random instance from seed and optional salt.

    Args:
        seed: Base seed string
        salt: Optional salt to modify the seed (e.g., reading_id)

    Returns:
        random.Random instance that will produce deterministic sequences
    """
    int_seed = stable_hash(f"{seed}{salt}")
    return random.Random(int_seed)


def stable_hash(text: str) -> int:
    """Process-independent non-negative hash of a string (31 bits)."""
    hash_obj = hashlib.sha256(text.encode("utf-8"))
    return int(hash_obj.hexdigest(), 16) & ((1 << 31) - 1)


def shuffle(items: Sequence[T], rng: RandomSource) -> List[T]:
    """Fisher-Yates shuffle driven by ``rng.random()``.

    Returns a new list; the input is left untouched.
    """
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def pick_unique(items: Sequence[T], count: int, rng: RandomSource) -> List[T]:
    """Draw ``count`` distinct items without replacement."""
    return shuffle(items, rng)[:count]


def draw_cards(deck_ids: Sequence[str], count: int, rng: RandomSource) -> List[Dict[str, Any]]:
    """Draw cards from deck and decide each card's orientation.

    Args:
        deck_ids: List of available card IDs
        count: Number of cards to draw
        rng: Random source used both for the shuffle and the coin-flips

    Returns:
        List of dicts with 'card_id' and 'reversed' keys, in draw order
    """
    drawn = pick_unique(deck_ids, count, rng)

    # Orientation is decided after the whole draw, one flip per card.
    return [
        {"card_id": card_id, "reversed": rng.random() > REVERSAL_THRESHOLD}
        for card_id in drawn
    ]


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4()}"
