"""Block file validator CLI."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

import click

from blockcheck import __version__
from blockcheck.config import BlockcheckConfig, load_config, load_default_config
from blockcheck.errors import DiagnosticRenderer
from blockcheck.factory import FactoryLoadError, load_factory, load_preprocessors
from blockcheck.importer import parse_aliases
from blockcheck.validate import ValidateOptions, validate as validate_blocks


def _load_config(config_path: str | None) -> BlockcheckConfig:
    try:
        if config_path:
            return load_config(Path(config_path))
        return load_default_config()
    except tomllib.TOMLDecodeError as e:
        raise click.UsageError(f"invalid config: {e}") from e


@click.group()
@click.version_option(__version__, prog_name="blockcheck")
@click.option("-v", "--verbose", is_flag=True, help="Log debugging output to stderr.")
def main(verbose: bool) -> None:
    """Check block stylesheet files and explain what is wrong with them."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("blocks", nargs=-1, required=True, type=click.Path())
@click.option(
    "--factory",
    "factory_target",
    metavar="MODULE:ATTR",
    help="The block factory that parses each file.",
)
@click.option(
    "--preprocessors",
    type=click.Path(exists=True, dir_okay=False),
    help="A Python file whose PREPROCESSORS dict maps extensions to preprocessor functions.",
)
@click.option("--npm/--no-npm", default=None, help="Allow importing from node_modules.")
@click.option(
    "--alias",
    "aliases",
    nargs=2,
    multiple=True,
    metavar="ALIAS DIR",
    help="Define an import alias. Implies --npm.",
)
@click.option(
    "--context-lines",
    type=click.IntRange(min=0),
    default=None,
    help="Lines of source to show around each error.",
)
@click.option("--color/--no-color", default=None, help="Colorize the output.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Use this blockcheck.toml instead of searching for one.",
)
def validate(
    blocks: tuple[str, ...],
    factory_target: str | None,
    preprocessors: str | None,
    npm: bool | None,
    aliases: tuple[tuple[str, str], ...],
    context_lines: int | None,
    color: bool | None,
    config_path: str | None,
) -> None:
    """Validate block file syntax."""
    config = _load_config(config_path)
    val = config.validate

    factory_target = factory_target or val.factory
    if not factory_target:
        raise click.UsageError(
            "no block factory configured; pass --factory MODULE:ATTR "
            "or set [validate] factory in blockcheck.toml"
        )

    alias_pairs = [*val.aliases.items(), *aliases]
    if aliases:
        npm = True
    elif npm is None:
        npm = val.npm or bool(alias_pairs)

    try:
        factory = load_factory(factory_target)
        preprocessors = preprocessors or val.preprocessors
        loaded = load_preprocessors(Path(preprocessors)) if preprocessors else {}
    except FactoryLoadError as e:
        raise click.ClickException(str(e)) from e

    renderer = DiagnosticRenderer(
        color=config.output.color if color is None else color,
        context_lines=val.context_lines if context_lines is None else context_lines,
    )
    options = ValidateOptions(
        factory=factory,
        preprocessors=loaded,
        aliases=parse_aliases(alias_pairs),
        npm=npm,
    )
    report = validate_blocks(list(blocks), options, renderer)
    if not report.ok:
        raise SystemExit(report.exit_code)
