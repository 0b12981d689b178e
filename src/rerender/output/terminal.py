"""Rich terminal reporter — issues grouped by severity."""

from __future__ import annotations

from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from rerender.config.schema import SEVERITIES
from rerender.findings.models import Issue, Report

_SEVERITY_STYLE = {
    "High": "bold white on red",
    "Medium": "bold black on yellow",
    "Low": "bold black on bright_cyan",
    "Info": "bold white on grey37",
}

_SEVERITY_ICON = {
    "High": "🔴",
    "Medium": "🟡",
    "Low": "🔵",
    "Info": "⚪",
}


def _severity_pill(severity: str) -> Text:
    style = _SEVERITY_STYLE.get(severity, "")
    icon = _SEVERITY_ICON.get(severity, "")
    return Text(f" {icon} {severity.upper()} ", style=style)


def group_by_severity(issues: List[Issue]) -> Dict[str, List[Issue]]:
    """Bucket issues High → Info, keeping their ranked order inside a bucket."""
    groups: Dict[str, List[Issue]] = {sev: [] for sev in SEVERITIES}
    for issue in issues:
        groups.setdefault(issue.severity, []).append(issue)
    return {sev: items for sev, items in groups.items() if items}


def render(
    report: Report,
    *,
    source: str = "<stdin>",
    explain: bool = False,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print an analysis report to the terminal using Rich."""
    console = console or Console(stderr=True)

    if report.is_error:
        console.print()
        console.print(f"[bold red]✗ Analysis failed:[/bold red] {escape(report.error or '')}")
        return

    if report.is_clean:
        console.print()
        console.print(
            f"[bold green]✅ No re-render or accessibility issues found in {escape(source)}.[/bold green]"
        )
        return

    for severity, issues in group_by_severity(report.issues or []).items():
        console.print()
        table = Table(
            title=_severity_pill(severity),
            show_lines=True,
            title_justify="left",
            border_style="dim",
        )
        table.add_column("Rule", style="cyan", no_wrap=True)
        table.add_column("Line", justify="right", style="green")
        table.add_column("Issue", min_width=24)
        table.add_column("Snippet", style="magenta")

        for issue in issues:
            description = Text(issue.title, style="bold")
            if explain:
                description.append(f"\n\nWhy: {issue.why}", style="default")
                description.append(f"\nFix: {issue.fix}", style="default")
            table.add_row(
                issue.id,
                str(issue.occurrence.line_number),
                description,
                Text(issue.occurrence.snippet),
            )

        console.print(table)

    if show_summary:
        _print_summary(console, report, source)


def _print_summary(console: Console, report: Report, source: str) -> None:
    counts = {sev: 0 for sev in SEVERITIES}
    for issue in report.issues or []:
        counts[issue.severity] = counts.get(issue.severity, 0) + 1
    console.print()
    console.print(f"[dim]Source:[/dim]   {escape(source)}")
    console.print(f"[dim]Issues:[/dim]   {report.total_issues}")
    console.print(
        "[dim]By level:[/dim] "
        + "  ".join(f"{sev} {counts[sev]}" for sev in SEVERITIES)
    )
