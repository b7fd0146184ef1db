"""Validate a batch of block files and report every failure."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Sequence

import click

from blockcheck.errors import BlockError, DiagnosticRenderer, relative_path
from blockcheck.factory import FactoryType, Preprocessors, make_factory
from blockcheck.importer import Alias, Importer, PathImporter
from blockcheck.source import NoLocation

logger = logging.getLogger("blockcheck.validate")


@dataclass(frozen=True)
class ValidateOptions:
    factory: FactoryType
    preprocessors: Preprocessors = field(default_factory=dict)
    aliases: Sequence[Alias] = ()
    npm: bool = False


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of a validate run; the caller decides how to exit."""

    error_count: int
    file_count: int

    @property
    def exit_code(self) -> int:
        # clamped so that 256 errors can't wrap around to success
        return min(self.error_count, 255)

    @property
    def ok(self) -> bool:
        return self.error_count == 0


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"


def validate(
    block_files: Sequence[str],
    options: ValidateOptions,
    renderer: DiagnosticRenderer | None = None,
) -> ValidationReport:
    """Run every file through the block factory, printing one status line each.

    A failing file's full report is echoed as a single block so reports
    from different files never interleave.
    """
    renderer = renderer or DiagnosticRenderer()
    st = renderer.style
    importer: Importer | None = PathImporter(options.aliases) if options.npm else None
    factory = make_factory(options.factory, options.preprocessors, importer)

    error_count = 0
    for block_file in block_files:
        relative = relative_path(block_file)
        status = f"{st.error('error')}\t{st.filename(relative)}"
        try:
            if importer is not None:
                ident = importer.identifier(None, block_file)
                block_file = importer.filesystem_path(ident) or block_file
            factory.get_block_from_path(os.path.abspath(block_file))
        except BlockError as e:
            error = e
        except Exception as e:
            error_count += 1
            logger.exception("unexpected failure validating %s", relative)
            click.echo(f"{status} {e}")
            continue
        else:
            click.echo(f"{st.ok('ok')}\t{st.filename(relative)}")
            continue

        error_count += 1
        try:
            lines = renderer.report(relative, error)
        except Exception as e:
            logger.exception("cannot render error for %s", relative)
            click.echo(f"{status} {error.message} ({e})")
            continue
        if isinstance(error.location, NoLocation):
            click.echo(f"{status} {lines[0]}")
        else:
            click.echo("\n".join([status, *lines]))

    if error_count:
        click.echo(
            f"Found {st.count(_plural(error_count, 'error'))} "
            f"in {_plural(len(block_files), 'file')}."
        )
    return ValidationReport(error_count=error_count, file_count=len(block_files))
