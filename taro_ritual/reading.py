"""Drawing readings and moving their cards through the reveal states.

A card goes Hidden -> Revealed and never back. ``active_index`` is a
separate pointer that is always kept inside the card list.
"""

from typing import Callable, List, Optional, Sequence

from .catalog import CatalogError
from .models import Card, Reading, ReadingCard, Spread
from .utils.clock import now_ms
from .utils.rng import RandomSource, draw_cards, new_id


def resolve_spread(spread_id: Optional[str], spreads: Sequence[Spread]) -> Spread:
    """Find a spread by id, falling back to the first catalog entry."""
    if not spreads:
        raise CatalogError("Cannot start a reading with an empty spread catalog.")
    for s in spreads:
        if s.id == spread_id:
            return s
    return spreads[0]


def start_reading(
    spread_id: Optional[str],
    spreads: Sequence[Spread],
    deck: Sequence[Card],
    *,
    rng: RandomSource,
    clock: Callable[[], int] = now_ms,
    id_factory: Callable[[str], str] = new_id,
) -> Reading:
    spread = resolve_spread(spread_id, spreads)
    drawn = draw_cards([c.id for c in deck], spread.count, rng)

    cards: List[ReadingCard] = [
        ReadingCard(
            card_id=d["card_id"],
            is_reversed=d["reversed"],
            is_revealed=False,
            position=position,
        )
        for d, position in zip(drawn, spread.positions)
    ]

    return Reading(
        id=id_factory("reading"),
        spread_id=spread.id,
        created_at=clock(),
        cards=cards,
        active_index=0,
    )


def reveal_card(reading: Reading, index: int) -> bool:
    """Reveal one card and make it active.

    Returns False (and changes nothing) when ``index`` does not address a card.
    """
    if index < 0 or index >= len(reading.cards):
        return False
    reading.cards[index].is_revealed = True
    reading.active_index = index
    return True


def reveal_all(reading: Reading) -> None:
    for card in reading.cards:
        card.is_revealed = True


def clamp_index(index: int, length: int) -> int:
    return max(0, min(index, length - 1))


def set_active_index(reading: Reading, index: int) -> int:
    if not reading.cards:
        return reading.active_index
    reading.active_index = clamp_index(index, len(reading.cards))
    return reading.active_index
