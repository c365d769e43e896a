from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from taro_ritual.profile import ZODIAC, build_profile, parse_birth_date, resolve_zodiac


class TestParseBirthDate:
    @pytest.mark.parametrize("text,expected", [
        ("2020-02-29", "2020-02-29"),
        ("05.11.1987", "1987-11-05"),
        ("05/11/1987", "1987-11-05"),
        ("  1999-12-31 ", "1999-12-31"),
    ])
    def test_accepted_shapes(self, text, expected):
        assert parse_birth_date(text).canonical == expected

    def test_slash_is_day_first(self):
        parsed = parse_birth_date("03/04/2001")
        assert (parsed.date.month, parsed.date.day) == (4, 3)

    def test_result_is_immutable(self):
        parsed = parse_birth_date("2001-04-03")
        with pytest.raises(ValidationError):
            parsed.canonical = "2001-04-04"

    @pytest.mark.parametrize("text", [
        "31.02.2020",
        "29.02.2021",
        "31/04/2020",
        "2020-13-01",
        "00.01.2020",
        "2020-1-5",
        "5.1.2020",
        "1990/01/05",
        "0000-01-01",
        "",
        "tomorrow",
        "２０２０-０２-２９",
        "٢٩.٠٢.٢٠٢٠",
    ])
    def test_rejected(self, text):
        assert parse_birth_date(text) is None


class TestResolveZodiac:
    @pytest.mark.parametrize("month,day,sign", [
        (12, 22, "capricorn"),
        (1, 19, "capricorn"),
        (1, 20, "aquarius"),
        (12, 21, "sagittarius"),
        (2, 29, "pisces"),
        (3, 21, "aries"),
        (7, 22, "cancer"),
        (7, 23, "leo"),
    ])
    def test_boundaries(self, month, day, sign):
        assert resolve_zodiac(date(2020, month, day)).id == sign

    def test_every_day_matches_exactly_one_sign(self):
        from taro_ritual.profile import _in_range

        day = date(2020, 1, 1)
        while day.year == 2020:
            matches = [s for s in ZODIAC if _in_range(day.month, day.day, s.start, s.end)]
            assert len(matches) == 1, day
            day += timedelta(days=1)


class TestBuildProfile:
    def test_valid(self):
        profile = build_profile("20.01.1995")
        assert profile.id == "profile"
        assert profile.birth_date == "1995-01-20"
        assert profile.zodiac.name == "Aquarius"

    def test_blank_clears(self):
        profile = build_profile("")
        assert profile.birth_date is None
        assert profile.zodiac is None

    def test_invalid_returns_none(self):
        assert build_profile("29.02.2021") is None

    def test_non_ascii_digits_rejected(self):
        assert build_profile("２０２０-０２-２９") is None
