"""Implementation of the 'create' command.

The create command cuts a new release candidate branch from develop.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from release_flow.cli.output import print_dry_run, print_plan_header, print_success
from release_flow.config import load_config
from release_flow.core.release import RepositorySnapshot, execute_plan, plan_create
from release_flow.exceptions import UsageError
from release_flow.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console


def run_create(
    path: str | None,
    message: str,
    dry_run: bool,
    console: Console,
) -> None:
    """Run the create command.

    Args:
        path: Optional path to the project directory
        message: Annotation for the release candidate tag
        dry_run: Only show what would be done
        console: Console for standard output

    Raises:
        ReleaseFlowError: On any failure; nothing is written when the
            failure happens before execution starts
    """
    if not message.strip():
        raise UsageError("A message describing the new release must be supplied")

    project_path = Path(path) if path else Path.cwd()
    config = load_config(project_path)
    repo = GitRepository(project_path, remote=config.remote)
    version_file = repo.path / config.version_file

    snapshot = RepositorySnapshot.capture(repo, version_file)
    plan = plan_create(snapshot, message, config)

    print_plan_header(plan, execute=not dry_run, console=console)
    if dry_run:
        print_dry_run(plan, str(config.version_file), console)
        return

    execute_plan(
        plan,
        repo,
        version_file,
        report=lambda step: console.print(f"  [green]✓[/] {escape(step)}"),
    )
    print_success(plan, console)
