from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from .errors import ParseError, RangeError, TooFewArgumentsError

U8_MAX = 0xFF
U16_MAX = 0xFFFF

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")

_THIRTY_DAY_MONTHS = (4, 6, 9, 11)


def _parse_unsigned(token: str, max_value: int) -> int:
    """
    Read an unsigned integer field the way an unsigned integer parser does:
    ASCII digits with an optional leading '+', nothing else.
    """
    if not token:
        raise ParseError(ValueError("cannot parse integer from empty string"))
    if not _UNSIGNED_RE.fullmatch(token):
        raise ParseError(ValueError(f"invalid digit found in string {token!r}"))
    digits = token.lstrip("+").lstrip("0") or "0"
    if len(digits) > len(str(max_value)) or int(digits) > max_value:
        raise ParseError(ValueError("number too large to fit in target type"))
    return int(digits)


def _split_fields(text: str, sep: str, minimum: int) -> list[str]:
    fields = text.split(sep)
    if len(fields) < minimum:
        raise TooFewArgumentsError()
    return fields


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """0 for a month outside 1..12."""
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in _THIRTY_DAY_MONTHS:
        return 30
    if 1 <= month <= 12:
        return 31
    return 0


@dataclass(frozen=True)
class Date:
    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if not 0 <= self.year <= U16_MAX:
            raise RangeError()
        if not 1 <= self.month <= 12:
            raise RangeError()
        if not 1 <= self.day <= days_in_month(self.year, self.month):
            raise RangeError()

    @classmethod
    def create(cls, year: int, month: int, day: int) -> Date:
        return cls(year, month, day)

    @classmethod
    def from_tuple(cls, value: Tuple[int, int, int]) -> Date:
        year, month, day = value
        return cls(year, month, day)

    @classmethod
    def parse(cls, text: str) -> Date:
        """Parse `YYYY-M-D`; fields past the third are ignored."""
        fields = _split_fields(text, "-", 3)
        year = _parse_unsigned(fields[0], U16_MAX)
        month = _parse_unsigned(fields[1], U8_MAX)
        day = _parse_unsigned(fields[2], U8_MAX)
        return cls(year, month, day)

    def format(self) -> str:
        return f"{self.year}-{self.month:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class Time:
    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not (0 <= self.hour < 24 and 0 <= self.minute < 60):
            raise RangeError()

    @classmethod
    def create(cls, hour: int, minute: int) -> Time:
        return cls(hour, minute)

    @classmethod
    def from_tuple(cls, value: Tuple[int, int]) -> Time:
        hour, minute = value
        return cls(hour, minute)

    @classmethod
    def parse(cls, text: str) -> Time:
        """Parse `H:M`; fields past the second are ignored."""
        fields = _split_fields(text, ":", 2)
        hour = _parse_unsigned(fields[0], U8_MAX)
        minute = _parse_unsigned(fields[1], U8_MAX)
        return cls(hour, minute)

    def format(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class Datetime:
    date: Date
    time: Time

    @classmethod
    def create(cls, date: Date, time: Time) -> Datetime:
        return cls(date, time)

    @classmethod
    def from_tuples(cls, date: Tuple[int, int, int], time: Tuple[int, int]) -> Datetime:
        return cls(Date.from_tuple(date), Time.from_tuple(time))

    @classmethod
    def parse(cls, text: str) -> Datetime:
        """Parse `<date>.<time>`, e.g. `2023-1-1.10:50`."""
        parts = _split_fields(text, ".", 2)
        return cls(Date.parse(parts[0]), Time.parse(parts[1]))

    @classmethod
    def from_datetime(cls, value: datetime) -> Datetime:
        return cls(
            Date(value.year, value.month, value.day),
            Time(value.hour, value.minute),
        )

    @classmethod
    def now(cls, at: Optional[datetime] = None) -> Datetime:
        return cls.from_datetime(at or datetime.now())

    def to_datetime(self) -> datetime:
        """Naive stdlib datetime; raises ValueError for year 0 or past 9999."""
        return datetime(self.date.year, self.date.month, self.date.day, self.time.hour, self.time.minute)

    def format(self) -> str:
        return f"{self.date}.{self.time}"

    def __str__(self) -> str:
        return self.format()
