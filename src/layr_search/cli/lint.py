"""CLI commands for linting a project and listing rules."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer

from layr_search.core.config import SearchConfig, find_config, load_config
from layr_search.core.errors import LayrSearchError
from layr_search.core.loader import load_project
from layr_search.search import Diagnostic, IssueLevel, SearchOptions, find_problems, get_all_rules

logger = logging.getLogger(__name__)

EXIT_FINDINGS = 1
EXIT_USAGE = 2

_LEVEL_COLORS = {
    IssueLevel.ERROR: typer.colors.RED,
    IssueLevel.WARNING: typer.colors.YELLOW,
}


def _parse_path(dotted: str) -> tuple[str | int, ...]:
    return tuple(int(seg) if seg.isdigit() else seg for seg in dotted.split(".") if seg)


def _resolve_config(project: Path, config: Path | None) -> SearchConfig:
    if config is not None:
        if not config.exists():
            typer.echo(f"Config file not found: {config}", err=True)
            raise typer.Exit(code=EXIT_USAGE)
        return load_config(config)
    found = find_config(project.parent)
    if found is None:
        return SearchConfig()
    logger.debug("Using config %s", found)
    return load_config(found)


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """One-line human form: ``LEVEL [code] dotted.path key=value ...``."""
    details = " ".join(
        f"{key}={json.dumps(value)}" for key, value in diagnostic.payload.items()
    )
    line = f"{diagnostic.level.value.upper()} [{diagnostic.code}] {diagnostic.dotted_path}"
    return f"{line} {details}" if details else line


def lint_command(
    project: Path = typer.Argument(..., help="Project JSON file ({files: ...} or bare files)"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to layr.toml"),
    format_: str = typer.Option("human", "--format", "-f", help="Output format: human or json"),
    rule: list[str] = typer.Option([], "--rule", "-r", help="Only run these rule codes"),
    level: list[str] = typer.Option([], "--level", "-l", help="Only run rules at these levels"),
    path: list[str] = typer.Option(
        [], "--path", "-p", help="Only report under these dotted paths (e.g. components.home)"
    ),
) -> None:
    """Lint a project file and report diagnostics."""
    if format_ not in ("human", "json"):
        typer.echo(f"Unknown format '{format_}' (expected human or json)", err=True)
        raise typer.Exit(code=EXIT_USAGE)

    try:
        levels = [IssueLevel(value) for value in level] or None
    except ValueError:
        typer.echo(f"Unknown level in {level} (expected error or warning)", err=True)
        raise typer.Exit(code=EXIT_USAGE)

    try:
        settings = _resolve_config(project, config)
        files = load_project(project)
        options = SearchOptions(
            levels=levels,
            rules=rule or None,
            paths_to_visit=[_parse_path(p) for p in path] or None,
        )
        diagnostics = find_problems(files, options=options, config=settings)
    except LayrSearchError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=EXIT_USAGE)

    if format_ == "json":
        typer.echo(json.dumps([d.model_dump(mode="json") for d in diagnostics], indent=2))
    else:
        for diagnostic in diagnostics:
            typer.secho(format_diagnostic(diagnostic), fg=_LEVEL_COLORS.get(diagnostic.level))
        errors = sum(1 for d in diagnostics if d.level == IssueLevel.ERROR)
        warnings = len(diagnostics) - errors
        typer.secho(f"\n{errors} error(s), {warnings} warning(s)", bold=True)

    if any(d.level == IssueLevel.ERROR for d in diagnostics):
        raise typer.Exit(code=EXIT_FINDINGS)


def rules_command() -> None:
    """List registered rules with their level and category."""
    for registered in get_all_rules():
        typer.echo(
            f"  {registered.code:34s} {registered.level.value:8s} {registered.category.value}"
        )
