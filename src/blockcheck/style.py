"""Terminal styling for validator output."""

from __future__ import annotations

# ANSI color codes
_BOLD = "\033[1m"
_BOLD_WHITE = "\033[1;37m"
_BOLD_BRIGHT_WHITE = "\033[1;97m"
_BOLD_BRIGHT_RED = "\033[1;91m"
_UNDERLINE_BRIGHT_RED = "\033[4;91m"
_RED = "\033[31m"
_BRIGHT_RED = "\033[91m"
_GREEN = "\033[32m"
_BRIGHT_WHITE = "\033[97m"
_RESET = "\033[0m"


class Style:
    """Marks spans of text for emphasis; a no-op when color is off."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _wrap(self, code: str, text: str) -> str:
        if not self.color or not text:
            return text
        return f"{code}{text}{_RESET}"

    def ok(self, text: str) -> str:
        return self._wrap(_GREEN, text)

    def error(self, text: str) -> str:
        return self._wrap(_RED, text)

    def count(self, text: str) -> str:
        return self._wrap(_BRIGHT_RED, text)

    def filename(self, text: str) -> str:
        return self._wrap(_BRIGHT_WHITE, text)

    def header(self, text: str) -> str:
        return self._wrap(_BOLD_BRIGHT_RED, text)

    def label(self, text: str) -> str:
        return self._wrap(_BOLD_WHITE, text)

    def location(self, text: str) -> str:
        return self._wrap(_BOLD_BRIGHT_WHITE, text)

    def gutter(self, text: str) -> str:
        return self._wrap(_BOLD, text)

    def error_gutter(self, text: str) -> str:
        return self._wrap(_BOLD_BRIGHT_RED, text)

    def emphasize(self, text: str) -> str:
        """Highlight the part of a line that is in error."""
        return self._wrap(_UNDERLINE_BRIGHT_RED, text)
