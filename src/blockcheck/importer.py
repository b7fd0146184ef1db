"""Resolve aliased and package-style block imports to files on disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

logger = logging.getLogger("blockcheck.importer")


class Importer(Protocol):
    def identifier(self, from_identifier: str | None, import_path: str) -> str: ...

    def filesystem_path(self, identifier: str) -> str | None: ...


@dataclass(frozen=True)
class Alias:
    alias: str
    path: Path


class PathImporter:
    """Looks up imports through an alias table, then ``node_modules``.

    Identifiers are absolute paths when the import can be found, or the
    import path itself when it can't.
    """

    def __init__(self, aliases: Sequence[Alias] = (), root: Path | None = None) -> None:
        self.aliases = list(aliases)
        self.root = (root or Path.cwd()).resolve()

    def identifier(self, from_identifier: str | None, import_path: str) -> str:
        base = Path(from_identifier).parent if from_identifier else self.root
        for candidate in self._candidates(import_path, base):
            if candidate.is_file():
                logger.debug("resolved %s -> %s", import_path, candidate)
                return str(candidate.resolve())
        return import_path

    def filesystem_path(self, identifier: str) -> str | None:
        path = Path(identifier)
        return str(path) if path.is_absolute() and path.is_file() else None

    def _candidates(self, import_path: str, base: Path) -> list[Path]:
        head, _, rest = import_path.partition("/")
        found = [a.path / rest for a in self.aliases if a.alias == head and rest]
        if Path(import_path).is_absolute():
            return [*found, Path(import_path)]
        found.append(base / import_path)
        for directory in (base, *base.parents):
            found.append(directory / "node_modules" / import_path)
        return found


def parse_aliases(pairs: Sequence[tuple[str, str]]) -> list[Alias]:
    """Turn ``(alias, directory)`` pairs into aliases with absolute paths."""
    return [Alias(str(name), Path(str(directory)).resolve()) for name, directory in pairs]
