"""Source positions, ranges and error locations for diagnostics."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

_LEADING_WS = re.compile(r"\s*")


@dataclass(frozen=True, order=True)
class Position:
    """A 1-indexed line/column pair."""

    line: int
    column: int


@dataclass(frozen=True)
class Range:
    """A start/optional-end pair within a named source.

    ``end`` of ``None`` marks a single-point error.
    """

    filename: str
    start: Position
    end: Position | None = None

    @property
    def end_line(self) -> int:
        return self.end.line if self.end is not None else self.start.line

    def normalized(self) -> Range:
        """Clamp an inverted range so that it ends where it starts."""
        if self.end is not None and self.end < self.start:
            return Range(self.filename, self.start, self.start)
        return self

    def __str__(self) -> str:
        return char_in_file(self.filename, self.start)


@dataclass(frozen=True)
class MappedRange(Range):
    """A source range recovered through a preprocessor's source map.

    ``generated`` locates the same problem in the preprocessor's output.
    """

    generated: Range | None = None

    def normalized(self) -> MappedRange:
        if self.end is not None and self.end < self.start:
            return MappedRange(self.filename, self.start, self.start, self.generated)
        return self


@dataclass(frozen=True)
class NoLocation:
    """The error could not be tied to a position."""


ErrorLocation = Union[NoLocation, Range, MappedRange]


def classify_location(location: object) -> ErrorLocation:
    """Decide once which rendering path a captured location takes."""
    if isinstance(location, MappedRange) and location.generated is not None:
        return location
    if isinstance(location, Range):
        if isinstance(location, MappedRange):
            return Range(location.filename, location.start, location.end)
        return location
    return NoLocation()


def char_in_file(filename: str, position: Position) -> str:
    return f"{filename}:{position.line}:{position.column}"


def split_leading_whitespace(text: str) -> tuple[str, str]:
    """Return ``(whitespace, remainder)`` for the leading run of whitespace."""
    ws = _LEADING_WS.match(text).group(0)
    return ws, text[len(ws) :]
