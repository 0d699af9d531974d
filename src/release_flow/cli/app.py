"""Typer application for release-flow.

Every command funnels its errors through ``_reporting_errors``: a
ReleaseFlowError becomes a one-line diagnostic on stderr and an exit with
the error's exit code.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from release_flow import __version__
from release_flow.cli.commands import run_create, run_upgrade
from release_flow.exceptions import ReleaseFlowError

app = typer.Typer(
    name="release-flow",
    help="Create release candidates and upgrade release versions from git history.",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

PathOption = Annotated[
    str | None,
    typer.Option("--path", "-p", help="Project directory (defaults to the current directory)."),
]
DryRunOption = Annotated[
    bool,
    typer.Option("--dry-run", help="Show what would be done without changing the repository."),
]


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@contextmanager
def _reporting_errors() -> Iterator[None]:
    try:
        yield
    except ReleaseFlowError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(code=e.exit_code) from e


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"release-flow {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log every git command.")
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = None,
) -> None:
    """Semantic versioning for develop / release candidate / master workflows."""
    configure_logging(verbose)


@app.command()
def create(
    message: Annotated[str, typer.Argument(help="Message for the release candidate tag.")],
    path: PathOption = None,
    dry_run: DryRunOption = False,
) -> None:
    """Cut a new release candidate branch from develop."""
    with _reporting_errors():
        run_create(path, message, dry_run, console)


@app.command()
def upgrade(
    path: PathOption = None,
    dry_run: DryRunOption = False,
) -> None:
    """Retag the current release candidate or master branch."""
    with _reporting_errors():
        run_upgrade(path, dry_run, console)


def main() -> None:
    app()
