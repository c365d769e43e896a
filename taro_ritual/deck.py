"""The 78-card Rider-Waite-Smith deck.

Major arcana carry their own meanings; minor arcana meanings are composed
from the rank and the suit's domain.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .models import Card, CardMeaning
from .utils.rng import stable_hash

DECK_SIZE = 78


class DeckError(RuntimeError):
    pass


# id number, name, element, keywords, upright, reversed
_MAJORS: List[Tuple[int, str, str, Tuple[str, ...], str, str]] = [
    (0, "The Fool", "Air", ("beginnings", "freedom", "trust"),
     "Freedom, the start of a journey, spontaneity, faith in life.",
     "Recklessness, hesitation, fear of the new."),
    (1, "The Magician", "Air", ("will", "skill", "initiative"),
     "Will, mastery, initiative, power made visible.",
     "Manipulation, scattered focus, weak concentration."),
    (2, "The High Priestess", "Water", ("intuition", "mystery", "inner voice"),
     "Intuition, mystery, deep knowing, the inner voice.",
     "Hidden information, doubt, noise instead of silence."),
    (3, "The Empress", "Earth", ("abundance", "care", "growth"),
     "Fertility, growth, care, creative abundance.",
     "Smothering care, dependence, depletion."),
    (4, "The Emperor", "Fire", ("structure", "authority", "stability"),
     "Structure, stability, authority, responsibility.",
     "Rigidity, control, suppression of what is alive."),
    (5, "The Hierophant", "Earth", ("tradition", "teaching", "values"),
     "Tradition, a mentor, learning, shared values.",
     "Conformity, losing the essence, rebellion against meaning."),
    (6, "The Lovers", "Air", ("choice", "union", "closeness"),
     "Choice, union, agreement of values, closeness.",
     "Discord, doubt, conflicting values."),
    (7, "The Chariot", "Water", ("movement", "victory", "self-control"),
     "Movement, victory, self-control, the road ahead.",
     "Losing course, haste, loss of control."),
    (8, "Strength", "Fire", ("courage", "patience", "gentle power"),
     "Inner strength, patience, gentle power.",
     "Self-doubt, weakness, suppressed instincts."),
    (9, "The Hermit", "Earth", ("solitude", "wisdom", "search"),
     "Solitude, wisdom, searching, the light within.",
     "Isolation, coldness, withdrawal from contact."),
    (10, "Wheel of Fortune", "Fire", ("cycles", "change", "chance"),
     "Cycles, change, a turn of fate, opportunity.",
     "Stagnation, delayed change, resisting the cycle."),
    (11, "Justice", "Air", ("balance", "truth", "law"),
     "Justice, balance, law, an answer.",
     "Bias, unfairness, lack of balance."),
    (12, "The Hanged Man", "Water", ("pause", "perspective", "surrender"),
     "A pause, another point of view, sacrifice for meaning.",
     "Being stuck, resistance, a fruitless delay."),
    (13, "Death", "Water", ("endings", "transformation", "release"),
     "Ending, transformation, release.",
     "Resisting change, holding on to the past."),
    (14, "Temperance", "Fire", ("harmony", "moderation", "healing"),
     "Harmony, moderation, healing, rhythm.",
     "Imbalance, excess, impatience."),
    (15, "The Devil", "Earth", ("attachment", "temptation", "bonds"),
     "Attachment, temptation, material bonds.",
     "Release, breaking free from dependence."),
    (16, "The Tower", "Fire", ("upheaval", "revelation", "release"),
     "Collapse of illusions, a sharp turn, liberation.",
     "Holding back change, a drawn-out crisis."),
    (17, "The Star", "Air", ("hope", "inspiration", "renewal"),
     "Hope, inspiration, healing, light.",
     "Fatigue, fading faith, doubt."),
    (18, "The Moon", "Water", ("subconscious", "dreams", "fear"),
     "The subconscious, fog, fears, images.",
     "Clarity returning, secrets revealed, stepping out of fear."),
    (19, "The Sun", "Fire", ("joy", "success", "vitality"),
     "Joy, success, clarity, vitality.",
     "Clouded joy, doubting success."),
    (20, "Judgement", "Fire", ("awakening", "calling", "reckoning"),
     "Awakening, reckoning, calling, a summons.",
     "An ignored call, fear of deciding."),
    (21, "The World", "Earth", ("completion", "wholeness", "result"),
     "Completion, wholeness, harmony, achievement.",
     "An unfinished cycle, incompleteness."),
]

# rank, upright theme, reversed theme
_RANKS: List[Tuple[str, str, str]] = [
    ("Ace", "Beginning and potential", "Blocked potential"),
    ("Two", "Balance and choice", "Inner discord"),
    ("Three", "Growth and expression", "Slowed growth"),
    ("Four", "Stability and support", "Stagnation or rigidity"),
    ("Five", "Tension and trial", "Drawn-out conflict"),
    ("Six", "Movement and alliance", "Disrupted movement"),
    ("Seven", "Strategy and resilience", "Lost focus"),
    ("Eight", "Skill and mastery", "Routine without meaning"),
    ("Nine", "Maturity and depth", "Wariness"),
    ("Ten", "Culmination and result", "Overload"),
    ("Page", "News and curiosity", "Delayed news"),
    ("Knight", "Impulse and motion", "Impulse without control"),
    ("Queen", "Mature support", "Hidden tension"),
    ("King", "Responsibility and authority", "Rigid authority"),
]

# suit, label, element, domain
_SUITS: List[Tuple[str, str, str, str]] = [
    ("wands", "Wands", "Fire", "will, impulse and action"),
    ("cups", "Cups", "Water", "feelings, closeness and relationships"),
    ("swords", "Swords", "Air", "thoughts, decisions and clarity"),
    ("pentacles", "Pentacles", "Earth", "resources, body and stability"),
]


def _major(number: int, name: str, element: str, keywords: Tuple[str, ...],
           upright: str, reversed_: str) -> Card:
    card_id = f"major-{number:02d}"
    return Card(
        id=card_id,
        name=name,
        arcana="major",
        number=number,
        element=element,
        keywords=keywords,
        upright=CardMeaning(
            title=f"{name}: upright",
            meaning=upright,
            psychology=f"Notice where {keywords[0]} already shows up in your life.",
            advice=f"Lean into {keywords[1]} with a clear intention.",
        ),
        reversed=CardMeaning(
            title=f"{name}: reversed",
            meaning=reversed_,
            psychology=f"Something in the theme of {keywords[0]} is asking for attention.",
            advice=f"Slow down and look honestly at {keywords[2]}.",
        ),
        seed=stable_hash(card_id),
    )


def _minor(suit: str, label: str, element: str, domain: str, number: int,
           rank: str, upright: str, reversed_: str) -> Card:
    card_id = f"{suit}-{number:02d}"
    name = f"{rank} of {label}"
    return Card(
        id=card_id,
        name=name,
        arcana="minor",
        suit=suit,
        rank=rank,
        number=number,
        element=element,
        keywords=(upright.split(" and ")[0].lower(), label.lower(), element.lower()),
        upright=CardMeaning(
            title=f"{name}: upright",
            meaning=f"{upright}. The realm of {domain}.",
            psychology=f"Your {domain.split(',')[0]} set the pace here.",
            advice="Act on what is already in your hands.",
        ),
        reversed=CardMeaning(
            title=f"{name}: reversed",
            meaning=f"{reversed_}. The realm of {domain}.",
            psychology="The theme needs reviewing before moving on.",
            advice="Name the block before trying to push through it.",
        ),
        seed=stable_hash(card_id),
    )


def _build_deck() -> List[Card]:
    cards = [_major(*row) for row in _MAJORS]
    for suit, label, element, domain in _SUITS:
        for number, (rank, upright, reversed_) in enumerate(_RANKS, start=1):
            cards.append(_minor(suit, label, element, domain, number, rank, upright, reversed_))
    return cards


_DECK: List[Card] = _build_deck()
_BY_ID: Dict[str, Card] = {c.id: c for c in _DECK}


def list_deck() -> List[Card]:
    return list(_DECK)


def get_card(card_id: str) -> Optional[Card]:
    return _BY_ID.get(card_id)


def validate_deck(cards: Optional[List[Card]] = None) -> None:
    cards = _DECK if cards is None else cards
    if len(cards) != DECK_SIZE:
        raise DeckError(f"Deck must contain exactly {DECK_SIZE} cards, got {len(cards)}.")
    ids = [c.id for c in cards]
    if len(ids) != len(set(ids)):
        raise DeckError("Duplicate card ids detected.")
