"""``baselinelint features`` -- List the compatibility table.

Prints every feature the scanner knows about, with its group and Baseline
tier. Filters narrow the list by group, tier or a search term.

Exit Codes:
    0 -- The table was listed (possibly empty after filtering).
    2 -- The compatibility table could not be loaded.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from baselinelint.core.compat.database import CompatDatabase, default_database
from baselinelint.core.compat.models import FeatureInfo, Tier
from baselinelint.exceptions import DatabaseError


def select_features(
    database: CompatDatabase,
    group: str | None = None,
    tier: str | None = None,
    search: str | None = None,
) -> list[FeatureInfo]:
    """Apply the command's filters, keeping table order."""
    features = database.search(search) if search else database.features
    if group:
        features = [f for f in features if f.group == group]
    if tier:
        wanted = Tier.parse(tier)
        features = [f for f in features if f.tier == wanted]
    return features


@click.command("features")
@click.option(
    "--group",
    type=click.Choice(["css", "javascript", "html"]),
    default=None,
    help="Only list features of one surface language.",
)
@click.option(
    "--tier",
    type=click.Choice(["limited", "newly", "widely"]),
    default=None,
    help="Only list features at one Baseline tier.",
)
@click.option("--search", default=None, help="Case-insensitive search over id, name and description.")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@click.option(
    "--features", "features_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Alternative compatibility table (YAML).",
)
def features_command(
    group: str | None,
    tier: str | None,
    search: str | None,
    output_format: str,
    features_path: str | None,
) -> None:
    """List the web features in the compatibility table."""
    try:
        database = (
            CompatDatabase.from_yaml(Path(features_path)) if features_path else default_database()
        )
    except DatabaseError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    features = select_features(database, group=group, tier=tier, search=search)
    if output_format == "json":
        click.echo(json.dumps({
            "version": database.version,
            "features": [feature.to_dict() for feature in features],
        }, indent=2))
        return

    from baselinelint.cli.output import print_features_table
    print_features_table(features, title=f"Baseline Features ({database.version})")
