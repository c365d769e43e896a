"""Birth-date parsing and zodiac lookup for the user profile.

Accepted inputs are ``YYYY-MM-DD``, ``DD.MM.YYYY`` and ``DD/MM/YYYY``.
Slashed dates are always read day-first; month-first input is not
supported and there is no switch for it.
"""

from __future__ import annotations

import re
from datetime import date
from typing import List, Optional, Tuple

from .models import ParsedBirthDate, Profile, ZodiacSign

_ISO = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$", re.ASCII)
_DOTTED = re.compile(r"^(\d{2})\.(\d{2})\.(\d{4})$", re.ASCII)
_SLASHED = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$", re.ASCII)


ZODIAC: List[ZodiacSign] = [
    ZodiacSign(id="capricorn", name="Capricorn", element="Earth", focus="structure and purpose",
               tone="calm steadiness", start=(12, 22), end=(1, 19)),
    ZodiacSign(id="aquarius", name="Aquarius", element="Air", focus="freedom and ideas",
               tone="a fresh look", start=(1, 20), end=(2, 18)),
    ZodiacSign(id="pisces", name="Pisces", element="Water", focus="feeling and intuition",
               tone="soft sensitivity", start=(2, 19), end=(3, 20)),
    ZodiacSign(id="aries", name="Aries", element="Fire", focus="impulse and beginnings",
               tone="bold energy", start=(3, 21), end=(4, 19)),
    ZodiacSign(id="taurus", name="Taurus", element="Earth", focus="resources and support",
               tone="mature stability", start=(4, 20), end=(5, 20)),
    ZodiacSign(id="gemini", name="Gemini", element="Air", focus="contact and ideas",
               tone="lively curiosity", start=(5, 21), end=(6, 20)),
    ZodiacSign(id="cancer", name="Cancer", element="Water", focus="home and safety",
               tone="gentle care", start=(6, 21), end=(7, 22)),
    ZodiacSign(id="leo", name="Leo", element="Fire", focus="heart and expression",
               tone="bright confidence", start=(7, 23), end=(8, 22)),
    ZodiacSign(id="virgo", name="Virgo", element="Earth", focus="detail and clarity",
               tone="precise clarity", start=(8, 23), end=(9, 22)),
    ZodiacSign(id="libra", name="Libra", element="Air", focus="balance and beauty",
               tone="soft equilibrium", start=(9, 23), end=(10, 22)),
    ZodiacSign(id="scorpio", name="Scorpio", element="Water", focus="depth and transformation",
               tone="strong depth", start=(10, 23), end=(11, 21)),
    ZodiacSign(id="sagittarius", name="Sagittarius", element="Fire", focus="meaning and the path",
               tone="inspiring breadth", start=(11, 22), end=(12, 21)),
]


def _split(text: str) -> Optional[Tuple[int, int, int]]:
    m = _ISO.match(text)
    if m:
        return int(m.group(1)), int(m.group(2)), int(m.group(3))
    for pattern in (_DOTTED, _SLASHED):
        m = pattern.match(text)
        if m:
            return int(m.group(3)), int(m.group(2)), int(m.group(1))
    return None


def parse_birth_date(text: str) -> Optional[ParsedBirthDate]:
    """Parse a birth date; None on any malformed or impossible date."""
    parts = _split((text or "").strip())
    if parts is None:
        return None

    year, month, day = parts
    if not year or month < 1 or month > 12 or day < 1 or day > 31:
        return None

    try:
        parsed = date(year, month, day)
    except ValueError:
        return None
    if (parsed.year, parsed.month, parsed.day) != (year, month, day):
        return None

    return ParsedBirthDate(date=parsed, canonical=f"{year:04d}-{month:02d}-{day:02d}")


def _in_range(month: int, day: int, start: Tuple[int, int], end: Tuple[int, int]) -> bool:
    if start[0] == 12 and end[0] == 1:
        return (month == 12 and day >= start[1]) or (month == 1 and day <= end[1])
    if month == start[0] and day >= start[1]:
        return True
    if month == end[0] and day <= end[1]:
        return True
    return start[0] < month < end[0]


def resolve_zodiac(when: date) -> ZodiacSign:
    for sign in ZODIAC:
        if _in_range(when.month, when.day, sign.start, sign.end):
            return sign
    return ZODIAC[0]


def build_profile(text: str) -> Optional[Profile]:
    """Profile for a birth-date input.

    Blank input clears the profile; an invalid date yields None and the
    caller keeps whatever profile it had.
    """
    if not (text or "").strip():
        return Profile(birth_date=None, zodiac=None)

    parsed = parse_birth_date(text)
    if parsed is None:
        return None
    return Profile(birth_date=parsed.canonical, zodiac=resolve_zodiac(parsed.date).summary())
