"""
layr-search CLI.

- lint:  analyse a project file and print diagnostics
- rules: list the registered rules
"""

from __future__ import annotations

import logging
import platform

import typer

from layr_search._version import get_version
from layr_search.cli.lint import lint_command, rules_command

__all__ = ["app", "main"]


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"layr-search {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


app = typer.Typer(
    help="layr-search - static analysis for layr projects.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """layr-search CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


app.command(name="lint")(lint_command)
app.command(name="rules")(rules_command)


def main() -> None:
    app(standalone_mode=True)
