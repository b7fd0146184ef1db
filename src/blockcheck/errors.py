"""Structured block errors and annotated source-snippet rendering."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Sequence

from blockcheck.extract import (
    DEFAULT_CONTEXT_LINES,
    ExtractionResult,
    extract_lines_from_source,
)
from blockcheck.source import (
    ErrorLocation,
    MappedRange,
    NoLocation,
    Range,
    char_in_file,
    classify_location,
    split_leading_whitespace,
)
from blockcheck.style import Style


class BlockError(Exception):
    """Raised by a block factory when a block file is invalid.

    ``import_stack`` holds the locations that referenced the failing file,
    innermost first, in the order they were recorded.
    """

    def __init__(
        self,
        message: str,
        location: Range | None = None,
        import_stack: Sequence[Range] = (),
    ) -> None:
        self.message = message
        self.location: ErrorLocation = classify_location(location)
        self.import_stack: tuple[Range, ...] = tuple(import_stack)
        if isinstance(self.location, Range):
            super().__init__(f"{message} ({self.location})")
        else:
            super().__init__(message)


@dataclass(frozen=True)
class LineSplit:
    """One source line cut around the part that is in error."""

    before: str
    during: str
    after: str = ""


def relative_path(filename: str) -> str:
    """Display ``filename`` relative to the current working directory."""
    return os.path.relpath(os.path.abspath(filename))


class DiagnosticRenderer:
    """Renders block errors as annotated excerpts of the offending source."""

    def __init__(
        self,
        *,
        color: bool = True,
        context_lines: int = DEFAULT_CONTEXT_LINES,
        style: Style | None = None,
    ) -> None:
        self.style = style or Style(color=color)
        self.context_lines = context_lines

    def report(self, relative_filename_hint: str, error: BlockError) -> list[str]:
        """Build the full report for one error, ready to print in order."""
        loc = error.location
        if isinstance(loc, NoLocation):
            return [error.message]

        loc = loc.normalized()
        filename = relative_path(loc.filename or relative_filename_hint)
        st = self.style
        lines = ["\t" + st.header(error.message)]

        for ref in reversed(error.import_stack):
            ref_file = relative_path(ref.filename) if ref.filename else relative_filename_hint
            lines.append(
                f"\t{st.label('In block referenced at')} "
                f"{st.location(char_in_file(ref_file, ref.start))}"
            )

        match loc:
            case MappedRange(generated=Range() as generated):
                gen_file = relative_path(generated.filename)
                lines.append(
                    f"\t{st.label('At compiled output of')} "
                    f"{st.location(char_in_file(gen_file, generated.start))}"
                )
                lines.extend(self.render_snippet(self._extract(generated), generated))
                heading = "Source Mapped to"
            case _:
                heading = "At"

        lines.append(
            f"\t{st.label(heading)} {st.location(char_in_file(filename, loc.start))}"
        )
        primary = replace(loc, filename=loc.filename or relative_filename_hint)
        lines.extend(self.render_snippet(self._extract(primary), primary))
        return lines

    def _extract(self, location: Range) -> ExtractionResult | None:
        return extract_lines_from_source(location, self.context_lines)

    def render_snippet(
        self, context: ExtractionResult | None, location: Range
    ) -> list[str]:
        """Number the window's lines and highlight the ones in error."""
        if context is None:
            return []
        loc = location.normalized()
        before = context.additional_lines.before
        in_range_end = len(context.lines) - context.additional_lines.after
        line_number = context.first_line_number(loc)
        width = len(str(line_number + len(context.lines) - 1))

        out: list[str] = []
        for i, line in enumerate(context.lines):
            gutter = f"{line_number:>{width}}:{' ' if line else ''}"
            if before <= i < in_range_end:
                split = self.split_line_on_error_range(line, line_number, loc)
                text = (
                    self.style.error_gutter(gutter)
                    + split.before
                    + self.style.emphasize(split.during)
                    + split.after
                )
            else:
                text = self.style.gutter(gutter) + line
            out.append("\t" + text)
            line_number += 1
        return out

    def split_line_on_error_range(
        self, line: str, line_number: int, location: Range
    ) -> LineSplit:
        """Cut ``line`` into text before, during and after the error.

        Columns are 1-indexed and the end column is inclusive.
        """
        loc = location.normalized()
        start, end = loc.start, loc.end
        if line_number == start.line and (end is None or end.line == start.line):
            if end is None:
                return LineSplit(line[: start.column - 1], line[start.column - 1 :])
            return LineSplit(
                line[: start.column - 1],
                line[start.column - 1 : end.column],
                line[end.column :],
            )
        if line_number == start.line:
            return LineSplit(line[: start.column - 1], line[start.column - 1 :])
        if end is not None and line_number == end.line:
            indent, during = split_leading_whitespace(line[: end.column])
            return LineSplit(indent, during, line[end.column :])
        indent, during = split_leading_whitespace(line)
        return LineSplit(indent, during)
