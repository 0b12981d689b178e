"""Rerender CLI — Typer application with analyze, rules, and init commands."""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from rerender import __version__

app = typer.Typer(
    name="rerender",
    help="Find unnecessary re-renders and accessibility leaks in React components.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _load(config_path: Optional[str]):
    """Load config and rules from the working directory, exit 2 on failure."""
    from rerender.config.loader import ConfigError, load_config
    from rerender.rules.models import RuleConfigError
    from rerender.rules.registry import build_registry

    root = Path.cwd()
    try:
        cfg = load_config(root, config_path)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    try:
        registry = build_registry(cfg, root)
    except RuleConfigError as exc:
        console.print(f"[bold red]Rule error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    return cfg, registry


def _read_source(target: Optional[Path]) -> tuple[str, str]:
    """Return (source label, text). ``-`` or no path reads stdin."""
    if target is None or str(target) == "-":
        return "<stdin>", sys.stdin.read()
    try:
        return str(target), target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        console.print(f"[bold red]Cannot read {target}:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


# ── analyze ───────────────────────────────────────────────────────────────────


@app.command()
def analyze(
    target: Optional[Path] = typer.Argument(None, help="Component file to analyze (default: stdin)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .rerender.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | sarif"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    fail_on: Optional[str] = typer.Option(None, "--fail-on", help="Severity threshold: info | low | medium | high"),
    explain: bool = typer.Option(False, "--explain", "-e", help="Show why/fix text for each issue"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
) -> None:
    """Analyze one component source file for performance and a11y issues."""
    from rerender.config.schema import FAIL_ON_LEVELS, severity_at_or_above
    from rerender.output import json_report, sarif, terminal
    from rerender.scanner.engine import analyze as run_analyze

    _configure_logging(verbose, debug)
    cfg, registry = _load(config)

    # --- CLI overrides ---
    if format:
        if format not in ("terminal", "json", "sarif"):
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if fail_on:
        if fail_on.lower() not in FAIL_ON_LEVELS:
            console.print(f"[bold red]Invalid fail-on level:[/bold red] {fail_on}")
            raise typer.Exit(code=2)
        cfg.scan.fail_on = fail_on.lower()
    if explain:
        cfg.output.explain = True

    if verbose or debug:
        console.print(f"[dim]Rules enabled: {len(registry.enabled_rules())}[/dim]")

    source, code = _read_source(target)

    size = len(code.encode("utf-8"))
    if size > cfg.max_input_bytes:
        console.print(
            f"[bold red]Input too large:[/bold red] {size} bytes "
            f"(limit {cfg.scan.max_input_kb} KB)"
        )
        raise typer.Exit(code=2)

    start = time.perf_counter()
    report = run_analyze(code, registry)
    if debug:
        console.print(f"[dim]Analysis duration: {(time.perf_counter() - start) * 1000:.1f}ms[/dim]")

    # --- Output ---
    report_text: Optional[str] = None

    if cfg.output.format == "terminal":
        terminal.render(
            report,
            source=source,
            explain=cfg.output.explain,
            show_summary=cfg.output.show_summary,
            console=console,
        )
    elif cfg.output.format == "json":
        report_text = json_report.render(report)
        print(report_text)
    elif cfg.output.format == "sarif":
        report_text = sarif.render(report, uri=source)
        print(report_text)

    # --- Write to file ---
    if output:
        if report_text is None:
            # Terminal output requested alongside a file: write JSON
            report_text = json_report.render(report)
        Path(output).write_text(report_text, encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")

    # --- Exit code ---
    if report.is_error:
        raise typer.Exit(code=2)
    if any(severity_at_or_above(i.severity, cfg.scan.fail_on) for i in report.issues or []):
        raise typer.Exit(code=1)
    raise typer.Exit(code=0)


# ── rules ─────────────────────────────────────────────────────────────────────


@app.command()
def rules(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .rerender.toml"),
) -> None:
    """List the rule catalog in evaluation order."""
    _, registry = _load(config)

    table = Table(title="Rerender Rules", border_style="dim", title_style="bold")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Severity", justify="center")
    table.add_column("Type", style="magenta")
    table.add_column("Title")
    table.add_column("Enabled", justify="center")

    for rule in registry.all_rules:
        title = Text(rule.title)
        if rule.requires_context_fact:
            title.append(f" (only when {rule.requires_context_fact})", style="dim")
        table.add_row(
            rule.id,
            rule.severity,
            rule.type,
            title,
            "[green]yes[/green]" if registry.is_enabled(rule.id) else "[red]no[/red]",
        )

    Console().print(table)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .rerender.toml in the current directory."""
    from rerender.config.defaults import DEFAULT_TOML
    from rerender.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"rerender {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """Rerender — find React performance leaks with static heuristics."""
