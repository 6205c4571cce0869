"""CLI commands for the Gfx documentation extractor.

Provides the Click-based command group 'gfxdoc' with subcommands for
generating documentation from Gfx doc-strings and for checking
doc-strings for problems.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from gfx_docs import __version__
from gfx_docs.errors import GfxDocsError
from gfx_docs.output.registry import OUTPUT_WRITERS, get_writer
from gfx_docs.parsers.lexer import DirectiveLexer
from gfx_docs.parsers.models import ScanResult
from gfx_docs.parsers.scanner import DocumentScanner
from gfx_docs.utils.config import AppConfig, ParserConfig, load_config
from gfx_docs.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def _collect_files(paths: tuple[str, ...], config: ParserConfig) -> list[Path]:
    """Collect all source files from the given paths.

    Files named explicitly are always kept. Directories are searched
    recursively for the configured extensions.

    Args:
        paths: File or directory paths to scan.
        config: Parser settings with extensions and exclude patterns.

    Returns:
        List of source file paths, in argument order.
    """
    exclude = set(config.exclude_patterns)
    files: list[Path] = []
    for path in paths:
        root = Path(path)
        if root.is_file():
            files.append(root)
            continue

        for f in sorted(root.rglob("*")):
            if f.suffix not in config.extensions or not f.is_file():
                continue
            if not any(part in exclude for part in f.parts):
                files.append(f)
    return files


def _extract_file(
    file_path: Path,
    lexer: DirectiveLexer,
    scanner: DocumentScanner,
    verbose: bool = False,
) -> Optional[ScanResult]:
    """Lex and scan a single source file.

    Args:
        file_path: Path to the source file.
        lexer: Lexer used to find directives.
        scanner: Scanner used to build the records.
        verbose: Echo each pipeline step to stderr.

    Returns:
        The file's ScanResult, or None if it could not be read.
    """
    filename = file_path.name
    if verbose:
        click.echo(f"Reading {filename}", err=True)
    try:
        contents = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Skipping %s: %s", file_path, e)
        return None

    if verbose:
        click.echo(f"Parsing {filename}", err=True)
    groups = lexer.lex(contents)

    if verbose:
        click.echo(f"Analyzing {filename}", err=True)
    return scanner.scan(groups, unit_name=filename)


def _extract_all(files: list[Path], verbose: bool = False) -> list[ScanResult]:
    lexer = DirectiveLexer()
    scanner = DocumentScanner()
    results = []
    for file_path in files:
        result = _extract_file(file_path, lexer, scanner, verbose=verbose)
        if result is not None:
            results.append(result)
    return results


@click.group()
@click.version_option(version=__version__, prog_name="gfxdoc")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str]) -> None:
    """Gfx documentation extractor: build docs from (% %) doc-strings."""
    config = load_config(config_path)
    setup_logging(
        level=config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.file,
    )
    ctx.obj = config


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    "-t",
    "--output-type",
    type=click.Choice(sorted(OUTPUT_WRITERS)),
    default=None,
    help="The type of output to produce.",
)
@click.option(
    "-o",
    "--output-destination",
    type=click.Path(),
    default=None,
    help="Where to put the output. JSON defaults to stdout.",
)
@click.option("-v", "--verbose", is_flag=True, help="Run verbosely.")
@click.option(
    "--include-empty",
    is_flag=True,
    help="Emit keys for missing values in JSON output.",
)
@click.pass_obj
def generate(
    config: AppConfig,
    paths: tuple[str, ...],
    output_type: Optional[str],
    output_destination: Optional[str],
    verbose: bool,
    include_empty: bool,
) -> None:
    """Generate documentation from the doc-strings in source files.

    Directories are searched for files with the configured extensions.
    One module is produced per file.
    """
    if verbose:
        setup_logging(
            level="DEBUG",
            log_format=config.logging.format,
            log_file=config.logging.file,
        )
    if include_empty:
        config.output.include_empty = True

    output_type = output_type or config.output.default_format
    try:
        writer = get_writer(output_type, config.output)
    except GfxDocsError as e:
        raise click.ClickException(str(e)) from e

    files = _collect_files(paths, config.parser)
    results = _extract_all(files, verbose=verbose)

    for result in results:
        for warning in result.warnings:
            click.echo(f"*** Warning, {warning}", err=True)

    modules = [r.module for r in results]
    if output_destination is None:
        if output_type == "json":
            destination = sys.stdout
        else:
            destination = config.output.output_dir
    else:
        destination = output_destination

    try:
        writer.generate(modules, destination)
    except GfxDocsError as e:
        raise click.ClickException(str(e)) from e

    if isinstance(destination, str):
        click.echo(f"Wrote {len(modules)} modules to {destination}", err=True)


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    "--strict/--no-strict",
    default=True,
    help="Exit with status 1 when any warning is found.",
)
@click.pass_obj
def check(config: AppConfig, paths: tuple[str, ...], strict: bool) -> None:
    """Check doc-strings for unsupported or unrecognized directives."""
    files = _collect_files(paths, config.parser)
    results = _extract_all(files)

    total_warnings = 0
    files_with_warnings = 0
    for result in results:
        module = result.module
        click.echo(
            f"{result.unit_name}: {module.name} ({len(module.doc_infos)} items)"
        )
        for warning in result.warnings:
            click.echo(f"  *** Warning, {warning}")
        if result.has_warnings:
            files_with_warnings += 1
            total_warnings += len(result.warnings)

    click.echo(
        f"\nChecked {len(results)} files, {total_warnings} warnings"
        f" in {files_with_warnings} files"
    )
    if strict and files_with_warnings:
        raise SystemExit(1)
