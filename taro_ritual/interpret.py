from typing import Any, Dict, Mapping, Optional

from .models import Card, CardMeaning, Reading, ReadingCard
from .utils.rng import stable_hash

DAILY_NOTES = [
    "Trust your first impression and stay gentle with yourself.",
    "Remember: this is a symbolic language, and the choice is always yours.",
    "Take a breath and let the cards mirror your inner rhythm.",
]


def card_meaning(card: Card, is_reversed: bool) -> CardMeaning:
    return card.reversed if is_reversed else card.upright


def render_interpretation(reading_card: ReadingCard, card: Optional[Card]) -> Dict[str, Any]:
    """Compact view of one drawn card for the UI.

    The meaning stays out of the payload until the card is revealed.
    """
    out: Dict[str, Any] = {
        "cardId": reading_card.card_id,
        "position": reading_card.position.model_dump(by_alias=True, exclude_none=True),
        "isRevealed": reading_card.is_revealed,
        "isReversed": reading_card.is_reversed,
        "orientation": "reversed" if reading_card.is_reversed else "upright",
    }
    if card is None or not reading_card.is_revealed:
        return out

    out["name"] = card.name
    out["element"] = card.element
    out["meaning"] = card_meaning(card, reading_card.is_reversed).model_dump()
    return out


def session_summary(reading: Reading, cards_by_id: Mapping[str, Card]) -> Optional[str]:
    """Names of the revealed cards in position order, or None if nothing is open yet."""
    names = []
    for rc in reading.cards:
        card = cards_by_id.get(rc.card_id)
        if card is None or not rc.is_revealed:
            continue
        names.append(f"{card.name} (reversed)" if rc.is_reversed else card.name)
    return " · ".join(names) if names else None


def daily_note(reading_id: Optional[str]) -> str:
    if not reading_id:
        return DAILY_NOTES[0]
    return DAILY_NOTES[stable_hash(reading_id) % len(DAILY_NOTES)]
