"""Readers that load (datetime, value) series from data files."""

from __future__ import annotations

import json
import logging
import re
import sqlite3
from abc import ABC, abstractmethod
from contextlib import closing
from datetime import datetime
from pathlib import Path
from typing import Any, Union

from .dateparsing import DateTimeParser

log = logging.getLogger(__name__)

Series = list[tuple[datetime, float]]
PathLike = Union[str, Path]

_NUMBER = re.compile(
    r"[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


class DataReader(ABC):
    """Reads a series of (datetime, value) points from a file."""

    @abstractmethod
    def read_data(self, path: PathLike) -> Series:
        """Return the valid points of the file; problems are logged, not raised."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


class JsonDataReader(DataReader):
    """Reads a JSON array of objects, each holding a date string and a number."""

    def __init__(self, parser: DateTimeParser) -> None:
        self._parser = parser

    def read_data(self, path: PathLike) -> Series:
        try:
            raw = Path(path).read_bytes()
        except OSError:
            log.warning("Failed to open file: %s", path)
            return []
        try:
            document = json.loads(raw, parse_int=float, parse_constant=_reject_constant)
        except ValueError:
            document = None
        if not isinstance(document, (list, dict)):
            log.warning("Invalid JSON document")
            return []
        if not isinstance(document, list):
            return []

        result: Series = []
        for index, record in enumerate(document):
            point = self._read_record(record if isinstance(record, dict) else {})
            if point is None:
                log.warning("Invalid data at record %d", index)
            else:
                result.append(point)
        return result

    def _read_record(self, record: dict[str, Any]) -> tuple[datetime, float] | None:
        date: datetime | None = None
        value: float | None = None
        # Object members are visited in key order; later members win.
        for key in sorted(record):
            item = record[key]
            if isinstance(item, str):
                date = self._parser.parse(item)
            elif isinstance(item, (int, float)) and not isinstance(item, bool):
                value = float(item)
        if date is None or value is None:
            return None
        return date, value


def _as_text(item: Any) -> str:
    if item is None:
        return ""
    if isinstance(item, bytes):
        return item.decode("utf-8", "replace")
    return str(item)


def _as_real(item: Any) -> float | None:
    if isinstance(item, (int, float)):
        return float(item)
    if item is None:
        return None
    text = _as_text(item).strip()
    return float(text) if _NUMBER.fullmatch(text) else None


class SqliteDataReader(DataReader):
    """Reads the first table of an SQLite database: date in column 0, value in column 1.

    The points are returned sorted by date, then value.
    """

    def __init__(self, parser: DateTimeParser) -> None:
        self._parser = parser

    def read_data(self, path: PathLike) -> Series:
        uri = Path(path).absolute().as_uri() + "?mode=ro"
        try:
            connection = sqlite3.connect(uri, uri=True)
        except sqlite3.Error as error:
            log.warning("Failed to open database: %s", error)
            return []

        with closing(connection):
            try:
                rows = self._first_table_rows(connection)
            except sqlite3.Error as error:
                log.warning("Query error: %s", error)
                return []

        result: Series = []
        for index, row in enumerate(rows):
            date = self._parser.parse(_as_text(row[0]))
            value = _as_real(row[1]) if len(row) > 1 else None
            if date is None or value is None:
                log.warning("Invalid data at row %d", index)
            else:
                result.append((date, value))
        return sorted(result)

    @staticmethod
    def _first_table_rows(connection: sqlite3.Connection) -> list[tuple[Any, ...]]:
        found = connection.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite\\_%' ESCAPE '\\'"
        ).fetchone()
        if found is None:
            raise sqlite3.OperationalError("database has no tables")
        table = found[0].replace('"', '""')
        return connection.execute(f'SELECT * FROM "{table}"').fetchall()