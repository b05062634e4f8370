"""
TimeOfDay Tests

Parsing, canonical rendering, next-day display and ordering of times in the
00:00-26:59 range.
"""

import pytest
from datetime import time

from business_hours.exceptions import InvalidTimeFormat
from business_hours.time_of_day import TimeOfDay


class TestTimeOfDayParse:
    """Strict H:MM / HH:MM parsing"""

    @pytest.mark.parametrize("text,hour,minute", [
        ("00:00", 0, 0),
        ("9:00", 9, 0),
        ("09:30", 9, 30),
        ("23:59", 23, 59),
        ("24:00", 24, 0),
        ("26:59", 26, 59),
    ])
    def test_accepts_valid_times(self, text, hour, minute):
        parsed = TimeOfDay.parse(text)
        assert (parsed.hour, parsed.minute) == (hour, minute)

    @pytest.mark.parametrize("text", [
        "27:00",
        "9:5",
        "09:60",
        "-1:00",
        "09:00:00",
        "9:00 PM",
        " 09:00",
        "09:00\n",
        "0900",
        "",
    ])
    def test_rejects_invalid_text(self, text):
        with pytest.raises(InvalidTimeFormat) as exc_info:
            TimeOfDay.parse(text)
        assert exc_info.value.code == "invalid_time_format"
        assert exc_info.value.value == text

    @pytest.mark.parametrize("value", [None, 900, 9.5, ["09:00"]])
    def test_rejects_non_strings(self, value):
        with pytest.raises(InvalidTimeFormat):
            TimeOfDay.parse(value)

    def test_direct_construction_is_range_checked(self):
        with pytest.raises(InvalidTimeFormat):
            TimeOfDay(27, 0)
        with pytest.raises(InvalidTimeFormat):
            TimeOfDay(10, 60)

    def test_parse_returns_existing_instance_unchanged(self):
        value = TimeOfDay(17, 0)
        assert TimeOfDay.parse(value) is value


class TestTimeOfDayRendering:
    """Canonical and display forms"""

    def test_renders_zero_padded(self):
        assert str(TimeOfDay.parse("9:05")) == "09:05"
        assert TimeOfDay.parse("0:00").to_string() == "00:00"

    def test_parse_render_round_trip(self):
        for text in ("00:00", "08:15", "17:00", "24:00", "26:30"):
            assert str(TimeOfDay.parse(text)) == text

    def test_normalize_next_day_times(self):
        assert TimeOfDay.parse("26:00").normalize() == "翌02:00"
        assert TimeOfDay.parse("24:00").normalize() == "翌00:00"
        assert TimeOfDay.parse("25:45").normalize() == "翌01:45"

    def test_normalize_same_day_time_is_canonical(self):
        assert TimeOfDay.parse("9:00").normalize() == "09:00"

    def test_normalize_does_not_change_value(self):
        value = TimeOfDay.parse("26:00")
        value.normalize()
        assert value.hour == 26


class TestTimeOfDayArithmetic:
    """Minute helpers and ordering"""

    def test_minutes(self):
        value = TimeOfDay.parse("25:30")
        assert value.total_minutes == 25 * 60 + 30
        assert value.same_day_minutes == 90
        assert value.is_next_day is True
        assert value.day_offset == 1

    def test_same_day_helpers(self):
        value = TimeOfDay.parse("17:00")
        assert value.same_day_minutes == value.total_minutes
        assert value.is_next_day is False
        assert value.day_offset == 0

    def test_as_time(self):
        assert TimeOfDay.parse("26:15").as_time() == time(2, 15)
        assert TimeOfDay.parse("09:00").as_time() == time(9, 0)

    def test_ordering_follows_total_minutes(self):
        times = [TimeOfDay.parse(t) for t in ("26:00", "09:00", "23:59", "24:00", "9:30")]
        assert [str(t) for t in sorted(times)] == ["09:00", "09:30", "23:59", "24:00", "26:00"]

    def test_is_hashable_and_immutable(self):
        value = TimeOfDay(17, 0)
        assert {value, TimeOfDay.parse("17:00")} == {value}
        with pytest.raises(AttributeError):
            value.hour = 18
