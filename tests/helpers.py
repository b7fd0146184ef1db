"""Shared test helpers for the blockcheck test suite."""

from __future__ import annotations

from pathlib import Path


class FakeBlockFactory:
    """Stands in for a real parser: fails with whatever ERRORS holds per file name."""

    ERRORS: dict[str, Exception] = {}

    def __init__(self, preprocessors=None, importer=None) -> None:
        self.preprocessors = preprocessors or {}
        self.importer = importer
        self.seen: list[str] = []

    def get_block_from_path(self, path: str) -> object:
        self.seen.append(path)
        error = self.ERRORS.get(Path(path).name)
        if error is not None:
            raise error
        return object()


def write_block(directory: Path, name: str, text: str) -> Path:
    """Write a block file and return its path."""
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
