"""
Wall-clock times that may run past midnight.

Stores that stay open after midnight write their closing time as 24:00-26:59
("25:30" is 1:30 the next morning). Keeping the hour above 23 lets plain
integer comparison order times inside one business cycle; turning a time into
an absolute instant is the accounting day resolver's job, not this module's.
"""
import re
from dataclasses import dataclass
from datetime import time

from .exceptions import InvalidTimeFormat

# Hour 0-26 with an optional leading digit, minute always two digits
TIME_OF_DAY_PATTERN = re.compile(r"([01]?[0-9]|2[0-6]):([0-5][0-9])")

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR
MAX_HOUR = 26

# Display prefix for times that fall on the following calendar day ("翌02:00")
NEXT_DAY_PREFIX = "翌"


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """
    Immutable hour/minute pair in the 00:00-26:59 range.

    Field order makes the generated comparisons equivalent to comparing
    ``total_minutes``, so 26:00 sorts after 23:00.
    """

    hour: int
    minute: int

    def __post_init__(self):
        for value in (self.hour, self.minute):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidTimeFormat(f"{self.hour}:{self.minute}")
        if not (0 <= self.hour <= MAX_HOUR and 0 <= self.minute < MINUTES_PER_HOUR):
            raise InvalidTimeFormat(f"{self.hour}:{self.minute}")

    @classmethod
    def parse(cls, text) -> "TimeOfDay":
        """
        Parse ``"H:MM"`` or ``"HH:MM"``.

        Anything else (seconds, AM/PM, surrounding whitespace, hour 27+,
        single-digit minutes) raises InvalidTimeFormat.
        """
        if isinstance(text, cls):
            return text
        if not isinstance(text, str):
            raise InvalidTimeFormat(text)

        match = TIME_OF_DAY_PATTERN.fullmatch(text)
        if match is None:
            raise InvalidTimeFormat(text)

        return cls(hour=int(match.group(1)), minute=int(match.group(2)))

    @property
    def total_minutes(self) -> int:
        return self.hour * MINUTES_PER_HOUR + self.minute

    @property
    def same_day_minutes(self) -> int:
        """Minutes after midnight on the calendar day this time falls on."""
        return self.total_minutes % MINUTES_PER_DAY

    @property
    def is_next_day(self) -> bool:
        return self.hour >= 24

    @property
    def day_offset(self) -> int:
        """0 for same-day times, 1 for 24:00 and later."""
        return self.total_minutes // MINUTES_PER_DAY

    def as_time(self) -> time:
        """Wall-clock ``datetime.time`` on the day the time falls on."""
        return time(self.hour % 24, self.minute)

    def to_string(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def normalize(self) -> str:
        """
        Presentation form: next-day times render as "翌HH:MM" with the hour
        brought back into 0-23. The value itself is not changed.
        """
        if self.is_next_day:
            return f"{NEXT_DAY_PREFIX}{self.hour - 24:02d}:{self.minute:02d}"
        return self.to_string()

    def __str__(self):
        return self.to_string()


def validate_time_of_day(value):
    """Model field validator that accepts only strict H:MM / HH:MM text."""
    from django.core.exceptions import ValidationError

    try:
        TimeOfDay.parse(value)
    except InvalidTimeFormat as e:
        raise ValidationError(str(e), code=InvalidTimeFormat.code)
