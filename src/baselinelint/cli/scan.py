"""``baselinelint scan <path>`` -- Report web features that are not Baseline.

Scans a directory tree (or a single file) for CSS, JavaScript, TypeScript
and HTML sources and reports every feature whose Baseline tier the chosen
level does not treat as safe.

Options are read from ``baselinelint.yaml`` in the scanned directory (or
the file passed with ``--config``); flags given on the command line win.

Exit Codes:
    0 -- Files were scanned and no issues were reported.
    1 -- One or more issues were reported.
    2 -- No files were scanned, or the options are invalid.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from baselinelint.core.compat.models import BaselineLevel
from baselinelint.core.issues.models import ScanResult
from baselinelint.exceptions import DatabaseError, InvalidOptionsError
from baselinelint.scanner import ScanOptions, find_config, load_config, scan

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool) -> None:
    """Route library logging to stderr; DEBUG with ``--verbose``."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_LOG_FORMAT,
    )


def _build_options(
    target: Path,
    config_path: str | None,
    baseline_level: str | None,
    include: tuple[str, ...],
    exclude: tuple[str, ...],
    workers: int | None,
    features_path: str | None,
    verbose: bool,
) -> ScanOptions:
    """Merge the config file (if any) with command-line overrides.

    Raises:
        InvalidOptionsError: If the config file or a flag is invalid.
    """
    config = Path(config_path) if config_path else None
    if config is None and target.is_dir():
        config = find_config(target)
    options = load_config(config) if config is not None else ScanOptions()
    return options.with_overrides(
        include_patterns=include or None,
        exclude_patterns=exclude or None,
        baseline_level=baseline_level,
        workers=workers,
        features_path=Path(features_path) if features_path else None,
        verbose=verbose or None,
    )


def _output_results(result: ScanResult, output_format: str) -> None:
    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        from baselinelint.cli.output import print_scan_results
        print_scan_results(result)


@click.command("scan")
@click.argument("path", type=click.Path(exists=True))
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@click.option(
    "--baseline-level",
    type=click.Choice([level.value for level in BaselineLevel]),
    default=None,
    help="Most permissive tier to report: limited (default), newly or widely.",
)
@click.option(
    "--include", multiple=True,
    help="Glob of files to scan (repeatable). Replaces the defaults.",
)
@click.option(
    "--exclude", multiple=True,
    help="Glob of files to skip (repeatable). Replaces the defaults.",
)
@click.option(
    "--workers", type=int, default=None,
    help="Number of files analysed concurrently (default: 1).",
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML config file (default: baselinelint.yaml in PATH).",
)
@click.option(
    "--features", "features_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Alternative compatibility table (YAML).",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.option(
    "--sort", "sort_issues", is_flag=True, default=False,
    help="Order issues by file, line and column.",
)
def scan_command(
    path: str,
    output_format: str,
    baseline_level: str | None,
    include: tuple[str, ...],
    exclude: tuple[str, ...],
    workers: int | None,
    config_path: str | None,
    features_path: str | None,
    verbose: bool,
    sort_issues: bool,
) -> None:
    """Scan PATH for web features that are not Baseline.

    Exit code 0 if no issues are reported, 1 if any are, 2 if nothing
    was scanned or the options are invalid.
    """
    configure_logging(verbose)
    target = Path(path)
    try:
        options = _build_options(
            target, config_path, baseline_level, include, exclude,
            workers, features_path, verbose,
        )
        result = scan(target, options)
    except (InvalidOptionsError, DatabaseError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    if sort_issues:
        result = result.sorted()

    if result.files_scanned == 0:
        if output_format == "json":
            click.echo(json.dumps(result.to_dict(), indent=2))
        else:
            click.echo("No files scanned in the target path.")
        sys.exit(2)

    _output_results(result, output_format)
    sys.exit(1 if result.has_issues else 0)
