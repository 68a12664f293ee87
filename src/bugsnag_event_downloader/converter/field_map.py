"""Field maps: ordered CSV column definitions and the path lookups behind them.

A field map file is a CSV with a ``header`` and a ``path`` column::

    header,path
    id,id
    received_at,received_at
    error_class,exception[0].error_class

Paths are dot-separated keys with optional bracketed indexes. A purely
numeric segment (``exception.0.message``) is an index as well.
"""

import csv
import logging
import re
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from bugsnag_event_downloader.errors import MappingLoadError

logger = logging.getLogger(__name__)

HEADER_COLUMN = "header"
PATH_COLUMN = "path"

_SEGMENT_RE = re.compile(r"^(?P<key>[^.\[\]]+)?(?P<indexes>(?:\[\d+\])*)$")
_INDEX_RE = re.compile(r"\[(\d+)\]")

_MISSING = object()


@dataclass(frozen=True)
class PathStep:
    """One accessor step: a mapping key or a sequence index."""
    key: str | None = None
    index: int | None = None

    def apply(self, value: Any) -> Any:
        if self.index is not None:
            if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
                return value[self.index] if self.index < len(value) else _MISSING
            if isinstance(value, Mapping):
                return value.get(str(self.index), _MISSING)
            return _MISSING

        if isinstance(value, Mapping):
            return value.get(self.key, _MISSING)
        return _MISSING


def compile_path(path: str) -> tuple[PathStep, ...]:
    """Turn a field path into accessor steps.

    Raises:
        ValueError: If the path is empty or syntactically invalid
    """
    if not path or not path.strip():
        raise ValueError("empty field path")

    steps: list[PathStep] = []
    for segment in path.strip().split("."):
        match = _SEGMENT_RE.match(segment)
        if not segment or not match:
            raise ValueError(f"invalid field path segment {segment!r} in {path!r}")

        key = match.group("key")
        if key is not None:
            steps.append(PathStep(index=int(key)) if key.isdigit() else PathStep(key=key))
        elif not match.group("indexes"):
            raise ValueError(f"invalid field path segment {segment!r} in {path!r}")

        for index in _INDEX_RE.findall(match.group("indexes")):
            steps.append(PathStep(index=int(index)))

    return tuple(steps)


@dataclass(frozen=True)
class FieldColumn:
    """A single output column: CSV header plus the record path it reads."""
    header: str
    path: str
    steps: tuple[PathStep, ...]

    @classmethod
    def from_definition(cls, header: str, path: str) -> "FieldColumn":
        return cls(header=header, path=path, steps=compile_path(path))

    def extract(self, record: Mapping[str, Any]) -> Any:
        """Follow the path through ``record``; None when any step is missing."""
        value: Any = record
        for step in self.steps:
            value = step.apply(value)
            if value is _MISSING:
                return None
        return value


class FieldMap:
    """Ordered collection of output columns."""

    def __init__(self, columns: Sequence[FieldColumn]):
        self.columns: tuple[FieldColumn, ...] = tuple(columns)

    @classmethod
    def from_pairs(cls, pairs: Sequence[tuple[str, str]]) -> "FieldMap":
        return cls([FieldColumn.from_definition(header, path) for header, path in pairs])

    @property
    def headers(self) -> list[str]:
        return [column.header for column in self.columns]

    def extract_row(self, record: Mapping[str, Any]) -> list[Any]:
        return [column.extract(record) for column in self.columns]

    def __iter__(self) -> Iterator[FieldColumn]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)


def load_field_map(path: str | Path) -> FieldMap:
    """Read a field map CSV file.

    Raises:
        MappingLoadError: If the file cannot be read or does not define columns
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8-sig", newline="") as f:
            return _parse_field_map(csv.reader(f), path)
    except OSError as e:
        raise MappingLoadError(path, e.strerror or str(e)) from e
    except (UnicodeDecodeError, csv.Error) as e:
        raise MappingLoadError(path, str(e)) from e


def _parse_field_map(reader: Iterator[list[str]], path: Path) -> FieldMap:
    header_row = next(reader, None)
    if header_row is None:
        raise MappingLoadError(path, "file is empty")

    names = [name.strip().lower() for name in header_row]
    if HEADER_COLUMN not in names or PATH_COLUMN not in names:
        raise MappingLoadError(path, f"header row must name '{HEADER_COLUMN}' and '{PATH_COLUMN}' columns")
    header_pos = names.index(HEADER_COLUMN)
    path_pos = names.index(PATH_COLUMN)

    columns: list[FieldColumn] = []
    for line_number, row in enumerate(reader, start=2):
        if not any(cell.strip() for cell in row):
            continue
        if len(row) <= max(header_pos, path_pos):
            raise MappingLoadError(path, f"line {line_number}: expected a header and a path")

        header = row[header_pos].strip()
        field_path = row[path_pos].strip()
        if not header or not field_path:
            raise MappingLoadError(path, f"line {line_number}: header and path must not be empty")

        try:
            columns.append(FieldColumn.from_definition(header, field_path))
        except ValueError as e:
            raise MappingLoadError(path, f"line {line_number}: {e}") from e

    if not columns:
        raise MappingLoadError(path, "no column definitions found")

    logger.debug(f"Loaded {len(columns)} columns from {path}")
    return FieldMap(columns)
