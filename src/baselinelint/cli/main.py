"""baselinelint CLI -- Baseline web-compatibility linting for front-end code.

Entry point for the ``baselinelint`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    scan      -- Report CSS, JavaScript and HTML features that are not Baseline.
    features  -- List the bundled compatibility table.

Usage::

    baselinelint scan ./src
    baselinelint scan ./src --baseline-level newly --format json
    baselinelint scan ./app.css
    baselinelint features --group css --tier limited
"""

from __future__ import annotations

import click

from baselinelint import __version__
from baselinelint.cli.features_cmd import features_command
from baselinelint.cli.scan import scan_command


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """baselinelint: Baseline web-compatibility checks for CSS, JS and HTML.

    Detects web-platform features in your sources and reports the ones
    that are not yet Baseline across the major browsers.
    """


# Register all subcommands
cli.add_command(scan_command)
cli.add_command(features_command)
