"""Extract a window of source lines around an error range."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from blockcheck.source import Range

logger = logging.getLogger("blockcheck.extract")

DEFAULT_CONTEXT_LINES = 2


@dataclass(frozen=True)
class AdditionalLines:
    """How many lines of the window are context rather than error."""

    before: int = 0
    after: int = 0


@dataclass(frozen=True)
class ExtractionResult:
    lines: tuple[str, ...]
    additional_lines: AdditionalLines

    def first_line_number(self, location: Range) -> int:
        return location.start.line - self.additional_lines.before


def extract_lines_from_source(
    location: Range, context_lines: int = DEFAULT_CONTEXT_LINES
) -> ExtractionResult | None:
    """Load ``location.filename`` and cut out the lines around ``location``.

    Returns None when the file can't be read or the range starts outside it.
    Lines the range claims past end-of-file come back as empty strings.
    """
    loc = location.normalized()
    try:
        with open(loc.filename, encoding="utf-8", errors="replace", newline="") as f:
            text = f.read()
    except (OSError, ValueError) as e:
        logger.debug("cannot read %s: %s", loc.filename, e)
        return None

    file_lines = _split_lines(text)
    start = loc.start.line
    if not 1 <= start <= len(file_lines):
        logger.debug(
            "line %d is outside %s (%d lines)", start, loc.filename, len(file_lines)
        )
        return None

    # lines claimed past end-of-file are padded, but no further than the context
    end = min(loc.end_line, len(file_lines) + context_lines)
    first = max(1, start - context_lines)
    last = max(end, min(len(file_lines), end + context_lines))

    lines = tuple(
        file_lines[n - 1] if n <= len(file_lines) else "" for n in range(first, last + 1)
    )
    return ExtractionResult(
        lines=lines,
        additional_lines=AdditionalLines(before=start - first, after=last - end),
    )


def _split_lines(text: str) -> list[str]:
    """Split on ``\\n`` and ``\\r\\n`` only, the breaks block line numbers count."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
