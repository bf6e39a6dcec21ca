# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Rich console output formatter for classification results."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from logtriage import __version__
from logtriage.core.constants import Severity
from logtriage.models.result import ClassificationResult
from logtriage.models.rule import PatternRule

console = Console()

SEVERITY_COLORS = {
    Severity.CRITICAL: "bold red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "cyan",
}


def format_result(
    result: ClassificationResult,
    *,
    target: str = "",
    max_findings: int | None = None,
) -> None:
    """Print a classification result to the console with Rich formatting."""
    console.print()
    console.print(f"[bold]logtriage v{__version__}[/bold] - Log Classification")
    console.print()

    info_table = Table(show_header=False, box=None, padding=(0, 2))
    info_table.add_column("key", style="dim")
    info_table.add_column("value")
    if target:
        info_table.add_row("Target:", target)
    info_table.add_row("Lines:", str(result.line_count))
    info_table.add_row("Findings:", str(result.total))
    console.print(info_table)
    console.print()

    counts = result.severity_counts
    banner_color = "bold red" if result.critical_count else "bold green"
    console.print(
        Panel(
            f"[{banner_color}]CRITICAL: {counts['critical']}[/{banner_color}]"
            f"  MEDIUM: {counts['medium']}  LOW: {counts['low']}",
            style=banner_color,
        )
    )
    console.print()

    shown = result.findings if max_findings is None else result.findings[:max_findings]
    for finding in shown:
        sev_color = SEVERITY_COLORS.get(finding.severity, "white")
        console.print(Text(finding.severity.upper().ljust(9), style=sev_color), end="")
        console.print(f"  L{finding.line_number:<6} [bold]{finding.category}[/bold]  ", end="")
        console.print(finding.message[:160], markup=False, highlight=False)

    hidden = result.total - len(shown)
    if hidden > 0:
        console.print(f"... {hidden} more finding(s)", style="dim")

    if not result.findings:
        console.print("No findings.", style="green")
    console.print()


def format_rules(rules: tuple[PatternRule, ...]) -> None:
    """Print the rule catalogue as a table."""
    table = Table(title="Rule catalogue")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Family")
    table.add_column("Category", style="bold", no_wrap=True)
    table.add_column("Pattern")
    table.add_column("Severity")

    for i, rule in enumerate(rules, 1):
        table.add_row(
            str(i),
            rule.family,
            rule.category,
            rule.pattern.pattern,
            Text(rule.severity, style=SEVERITY_COLORS.get(rule.severity, "white")),
        )
    console.print(table)
