"""Loading user-supplied block factories and preprocessors."""

from __future__ import annotations

import importlib
import importlib.util
import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Protocol

from blockcheck.importer import Importer

logger = logging.getLogger("blockcheck.factory")

Preprocessors = Mapping[str, Callable[..., Any]]


class BlockFactory(Protocol):
    """Parses block files; raises ``BlockError`` when one is invalid."""

    def get_block_from_path(self, path: str) -> object: ...


FactoryType = Callable[..., BlockFactory]


class FactoryLoadError(Exception):
    """A factory or preprocessor module could not be loaded."""


def load_factory(target: str) -> FactoryType:
    """Import ``module:attr`` and return the factory class it names."""
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise FactoryLoadError(f"expected MODULE:ATTR, got '{target}'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise FactoryLoadError(f"cannot import '{module_name}': {e}") from e
    try:
        factory = getattr(module, attr)
    except AttributeError:
        raise FactoryLoadError(f"'{module_name}' has no attribute '{attr}'") from None
    logger.debug("loaded block factory %s", target)
    return factory


def load_preprocessors(path: Path) -> dict[str, Callable[..., Any]]:
    """Execute a Python file and return its ``PREPROCESSORS`` mapping.

    The mapping takes a file extension (``"scss"``) to the callable that
    turns such a file into block syntax.
    """
    spec = importlib.util.spec_from_file_location("blockcheck_preprocessors", path)
    if spec is None or spec.loader is None:
        raise FactoryLoadError(f"cannot load preprocessors from {path}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except (OSError, SyntaxError) as e:
        raise FactoryLoadError(f"cannot load preprocessors from {path}: {e}") from e
    preprocessors = getattr(module, "PREPROCESSORS", None)
    if not isinstance(preprocessors, Mapping):
        raise FactoryLoadError(f"{path} does not define a PREPROCESSORS mapping")
    logger.debug("loaded preprocessors for %s", ", ".join(preprocessors) or "nothing")
    return dict(preprocessors)


def make_factory(
    factory_type: FactoryType,
    preprocessors: Preprocessors,
    importer: Importer | None,
) -> BlockFactory:
    return factory_type(preprocessors=preprocessors, importer=importer)
