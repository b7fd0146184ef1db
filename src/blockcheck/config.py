"""TOML config loading for blockcheck.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from blockcheck.extract import DEFAULT_CONTEXT_LINES

CONFIG_NAME = "blockcheck.toml"


@dataclass
class ValidateConfig:
    factory: str | None = None
    preprocessors: str | None = None
    npm: bool = False
    context_lines: int = DEFAULT_CONTEXT_LINES
    aliases: dict[str, str] = field(default_factory=dict)


@dataclass
class OutputConfig:
    color: bool = True


@dataclass
class BlockcheckConfig:
    validate: ValidateConfig = field(default_factory=ValidateConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find blockcheck.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> BlockcheckConfig:
    """Parse a blockcheck.toml file into a BlockcheckConfig.

    Relative paths in the file are taken relative to the file's directory.
    """
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = BlockcheckConfig()
    base = path.parent

    if "validate" in data:
        val = data["validate"]
        preprocessors = val.get("preprocessors")
        config.validate = ValidateConfig(
            factory=val.get("factory"),
            preprocessors=str(base / preprocessors) if preprocessors else None,
            npm=val.get("npm", False),
            context_lines=val.get("context_lines", DEFAULT_CONTEXT_LINES),
            aliases={
                name: str(base / directory)
                for name, directory in val.get("aliases", {}).items()
            },
        )

    if "output" in data:
        out = data["output"]
        config.output = OutputConfig(color=out.get("color", True))

    return config


def load_default_config() -> BlockcheckConfig:
    """Load the nearest blockcheck.toml, or defaults when there is none."""
    try:
        return load_config(find_config())
    except FileNotFoundError:
        return BlockcheckConfig()
