import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional, Literal, Tuple

Arcana = Literal["major", "minor"]
Suit = Literal["wands", "cups", "swords", "pentacles"]
SpreadLayout = Literal["line", "fan", "grid", "cross", "celtic"]

PROFILE_ID = "profile"


class _Record(BaseModel):
    """Base for models persisted or served with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _Frozen(_Record):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class CardMeaning(_Frozen):
    title: str
    meaning: str
    psychology: str = ""
    advice: str = ""


class Card(_Frozen):
    id: str
    name: str
    arcana: Arcana
    suit: Optional[Suit] = None
    rank: Optional[str] = None
    number: Optional[int] = None
    element: str
    keywords: Tuple[str, ...] = ()
    upright: CardMeaning
    reversed: CardMeaning
    seed: int = 0


class SpreadPosition(_Frozen):
    title: str
    hint: str
    placement: Optional[str] = None


class Spread(_Frozen):
    id: str
    name: str
    count: int = Field(..., ge=1)
    layout: SpreadLayout
    description: str = ""
    hidden: bool = False
    positions: Tuple[SpreadPosition, ...]


class ReadingCard(_Record):
    card_id: str
    is_reversed: bool = False
    is_revealed: bool = False
    position: SpreadPosition


class Reading(_Record):
    id: str
    spread_id: str
    created_at: int
    cards: List[ReadingCard]
    active_index: int = 0


class SessionRecord(Reading):
    summary: Optional[str] = None


class ZodiacSummary(_Frozen):
    id: str
    name: str
    element: str
    focus: str
    tone: str


class ZodiacSign(ZodiacSummary):
    start: Tuple[int, int]
    end: Tuple[int, int]

    def summary(self) -> ZodiacSummary:
        return ZodiacSummary(**self.model_dump(include={"id", "name", "element", "focus", "tone"}))


class ParsedBirthDate(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: datetime.date
    canonical: str


class Profile(_Record):
    id: Literal["profile"] = PROFILE_ID
    birth_date: Optional[str] = None
    zodiac: Optional[ZodiacSummary] = None


class Recommendation(_Record):
    recommended_id: Optional[str] = None
    message: str
