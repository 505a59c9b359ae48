"""Rich output formatting helpers for the baselinelint CLI.

Provides severity-colored terminal output for scan results and the
feature table.

Severity Color Mapping:
    error = bold red, warning = yellow, info = cyan
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from baselinelint.core.compat.models import FeatureInfo, Tier
from baselinelint.core.issues.models import IssueSeverity, ScanResult

_SEVERITY_STYLES: dict[IssueSeverity, str] = {
    IssueSeverity.ERROR: "bold red",
    IssueSeverity.WARNING: "yellow",
    IssueSeverity.INFO: "cyan",
}

_TIER_STYLES: dict[Tier, str] = {
    Tier.LIMITED: "bold red",
    Tier.NEWLY_AVAILABLE: "yellow",
    Tier.WIDELY_AVAILABLE: "green",
}

console = Console()


def severity_style(severity: IssueSeverity) -> str:
    """Return the Rich style string for a given severity."""
    return _SEVERITY_STYLES.get(severity, "white")


def tier_style(tier: Tier) -> str:
    """Return the Rich style string for a given Baseline tier."""
    return _TIER_STYLES.get(tier, "white")


def print_scan_results(result: ScanResult) -> None:
    """Print one table row per issue, followed by the summary line.

    Args:
        result: The scan result to render.
    """
    if not result.issues:
        console.print("[green]No Baseline compatibility issues found.[/green]")
        _print_scan_summary(result)
        return

    table = Table(title="Baseline Compatibility Issues", show_header=True, header_style="bold")
    table.add_column("Location", style="dim")
    table.add_column("Severity", justify="center")
    table.add_column("Feature", style="bold")
    table.add_column("Baseline", justify="center")
    table.add_column("Message")

    for issue in result.issues:
        table.add_row(
            issue.location(),
            Text(issue.severity.value.upper(), style=severity_style(issue.severity)),
            issue.feature,
            Text(issue.tier.display_name, style=tier_style(issue.tier)),
            issue.message,
        )

    console.print(table)
    suggestions = [issue for issue in result.issues if issue.suggestion]
    if suggestions:
        console.print("[bold]Suggestions:[/bold]")
        seen: set[str] = set()
        for issue in suggestions:
            if issue.feature_id in seen:
                continue
            seen.add(issue.feature_id)
            console.print(f"  [cyan]{escape(issue.feature)}[/cyan]: {escape(issue.suggestion)}")
    _print_scan_summary(result)


def _print_scan_summary(result: ScanResult) -> None:
    """Print a one-line summary after the results table."""
    summary = result.summary
    files = result.files
    parts = [f"[bold]{files.scanned}[/bold] files scanned"]
    if summary.errors > 0:
        parts.append(f"[red]{summary.errors} errors[/red]")
    if summary.warnings > 0:
        parts.append(f"[yellow]{summary.warnings} warnings[/yellow]")
    if summary.info > 0:
        parts.append(f"[cyan]{summary.info} info[/cyan]")
    parts.append(f"{summary.total} total issues in {files.with_issues} file(s)")
    console.print(" | ".join(parts))


def print_features_table(features: list[FeatureInfo], title: str) -> None:
    """Print the compatibility table as a Rich table.

    Args:
        features: Features to list, in display order.
        title: Table caption.
    """
    if not features:
        console.print("[dim]No matching features.[/dim]")
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Group", style="dim")
    table.add_column("Baseline", justify="center")
    table.add_column("Since", style="dim")

    for feature in features:
        table.add_row(
            feature.id,
            feature.name,
            feature.group,
            Text(feature.tier.display_name, style=tier_style(feature.tier)),
            feature.high_date or feature.low_date or "-",
        )
    console.print(table)
    console.print(f"[bold]{len(features)}[/bold] feature(s)")

