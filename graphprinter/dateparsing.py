"""Parsers that turn text into datetimes; a failed parse gives ``None``."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import lru_cache
from typing import Iterable

_MONTHS_LONG = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_MONTHS_SHORT = tuple(name[:3] for name in _MONTHS_LONG)
_DAYS_LONG = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_DAYS_SHORT = tuple(name[:3] for name in _DAYS_LONG)

_MONTH_LOOKUP = {
    name.lower(): number
    for names in (_MONTHS_LONG, _MONTHS_SHORT)
    for number, name in enumerate(names, start=1)
}


def _names(names: Iterable[str]) -> str:
    return "(?i:" + "|".join(sorted(names, key=len, reverse=True)) + ")"


_TWO = r"\d{1,2}"
_FIELD_SPECS: dict[str, dict[int, tuple[str, str]]] = {
    "d": {1: (_TWO, "day"), 2: (r"\d{2}", "day"),
          3: (_names(_DAYS_SHORT), "ignore"), 4: (_names(_DAYS_LONG), "ignore")},
    "M": {1: (_TWO, "month"), 2: (r"\d{2}", "month"),
          3: (_names(_MONTHS_SHORT), "month_name"), 4: (_names(_MONTHS_LONG), "month_name")},
    "y": {2: (r"\d{2}", "year2"), 4: (r"\d{4}", "year4")},
    "h": {1: (_TWO, "hour12"), 2: (r"\d{2}", "hour12")},
    "H": {1: (_TWO, "hour"), 2: (r"\d{2}", "hour")},
    "m": {1: (_TWO, "minute"), 2: (r"\d{2}", "minute")},
    "s": {1: (_TWO, "second"), 2: (r"\d{2}", "second")},
    "z": {1: (r"\d{1,3}", "msec"), 3: (r"\d{3}", "msec")},
}


@dataclass(frozen=True)
class _CompiledFormat:
    pattern: re.Pattern[str]
    kinds: tuple[str, ...]
    has_ampm: bool


def _tokens(fmt: str) -> Iterable[tuple[str, str]]:
    """Yield ("literal", text) or ("field", letters) pieces of a format string."""
    pos = 0
    while pos < len(fmt):
        char = fmt[pos]
        if char == "'":
            end = fmt.find("'", pos + 1)
            if end == pos + 1:
                yield "literal", "'"
                pos += 2
            elif end == -1:
                yield "literal", fmt[pos + 1:]
                return
            else:
                yield "literal", fmt[pos + 1:end]
                pos = end + 1
            continue
        if char in "aA" and fmt[pos + 1:pos + 2] in ("p", "P"):
            yield "ampm", fmt[pos:pos + 2]
            pos += 2
            continue
        if char not in _FIELD_SPECS:
            yield "literal", char
            pos += 1
            continue
        run_end = pos
        while run_end < len(fmt) and fmt[run_end] == char:
            run_end += 1
        remaining = run_end - pos
        lengths = sorted(_FIELD_SPECS[char], reverse=True)
        while remaining:
            length = next((n for n in lengths if n <= remaining), None)
            if length is None:
                yield "literal", char * remaining
                break
            yield "field", char * length
            remaining -= length
        pos = run_end


@lru_cache(maxsize=None)
def _compile(fmt: str) -> _CompiledFormat:
    parts: list[str] = []
    kinds: list[str] = []
    has_ampm = False
    for kind, text in _tokens(fmt):
        if kind == "literal":
            parts.append(re.escape(text))
        elif kind == "ampm":
            has_ampm = True
            parts.append("((?i:am|pm))")
            kinds.append("ampm")
        else:
            regex, field = _FIELD_SPECS[text[0]][len(text)]
            parts.append(f"({regex})")
            kinds.append(field)
    return _CompiledFormat(re.compile("".join(parts)), tuple(kinds), has_ampm)


def _parse_with(fmt: str, text: str) -> datetime | None:
    compiled = _compile(fmt)
    match = compiled.pattern.fullmatch(text)
    if match is None:
        return None
    fields = {"year": 1900, "month": 1, "day": 1, "hour": 0, "minute": 0, "second": 0}
    msec = 0
    twelve_hour: int | None = None
    pm: bool | None = None
    for kind, raw in zip(compiled.kinds, match.groups()):
        if kind == "ignore":
            continue
        if kind == "month_name":
            fields["month"] = _MONTH_LOOKUP[raw.lower()]
        elif kind == "year2":
            fields["year"] = 1900 + int(raw)
        elif kind == "year4":
            fields["year"] = int(raw)
        elif kind == "hour12":
            twelve_hour = int(raw)
            fields["hour"] = twelve_hour
        elif kind == "ampm":
            pm = raw.lower() == "pm"
        elif kind == "msec":
            msec = int(raw)
        else:
            fields[kind] = int(raw)
    if compiled.has_ampm and twelve_hour is not None:
        if not 1 <= twelve_hour <= 12:
            return None
        fields["hour"] = twelve_hour % 12 + (12 if pm else 0)
    try:
        return datetime(**fields, microsecond=msec * 1000)
    except ValueError:
        return None


class DateTimeParser(ABC):
    """Something that reads a datetime from text."""

    @abstractmethod
    def parse(self, text: str) -> datetime | None:
        """Return the parsed datetime, or ``None`` if the text is not valid."""


class MultiformatParser(DateTimeParser):
    """Tries a set of date-time format patterns in turn.

    Patterns use the field letters d, M, yy, yyyy, h, H, m, s, z and AP;
    text between single quotes is literal.
    """

    def __init__(self, formats: Iterable[str] = ()) -> None:
        self._formats: dict[str, None] = {}
        for fmt in formats:
            self.add_format(fmt)

    @property
    def formats(self) -> tuple[str, ...]:
        return tuple(self._formats)

    def add_format(self, fmt: str) -> None:
        _compile(fmt)
        self._formats[fmt] = None

    def remove_format(self, fmt: str) -> None:
        self._formats.pop(fmt, None)

    def clear_formats(self) -> None:
        self._formats.clear()

    def parse(self, text: str) -> datetime | None:
        for fmt in self._formats:
            result = _parse_with(fmt, text)
            if result is not None:
                return result
        return None


_MINUTES_PER_DAY = 1440
_INTEGER = re.compile(r"[+-]?\d+")


class DateAndMinutesParser(DateTimeParser):
    """Reads "<date> <minutes since midnight>" using another parser for the date."""

    def __init__(self, date_parser: DateTimeParser) -> None:
        self._date_parser = date_parser

    def set_date_parser(self, date_parser: DateTimeParser) -> None:
        self._date_parser = date_parser

    def parse(self, text: str) -> datetime | None:
        parts = text.split(" ")
        if len(parts) != 2:
            return None
        date_text, minutes_text = parts
        date = self._date_parser.parse(date_text)
        if date is None:
            return None
        minutes_text = minutes_text.strip()
        if not _INTEGER.fullmatch(minutes_text):
            return None
        minutes = int(minutes_text)
        if not 0 <= minutes <= _MINUTES_PER_DAY:
            return None
        return date + timedelta(minutes=minutes)


class AggregatedParser(DateTimeParser):
    """Returns the first successful result among several parsers."""

    def __init__(self, parsers: Iterable[DateTimeParser] = ()) -> None:
        self._parsers: dict[DateTimeParser, None] = {}
        for parser in parsers:
            self.add_parser(parser)

    @property
    def parsers(self) -> tuple[DateTimeParser, ...]:
        return tuple(self._parsers)

    def add_parser(self, parser: DateTimeParser) -> None:
        self._parsers[parser] = None

    def remove_parser(self, parser: DateTimeParser) -> None:
        self._parsers.pop(parser, None)

    def clear_parsers(self) -> None:
        self._parsers.clear()

    def parse(self, text: str) -> datetime | None:
        for parser in self._parsers:
            result = parser.parse(text)
            if result is not None:
                return result
        return None