"""Implementation of the 'upgrade' command.

On a release candidate branch the version is recomputed from the commits
since the branch's last tag. On master a merged candidate is promoted or a
merged hotfix is released.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from release_flow.cli.output import print_dry_run, print_plan_header, print_success
from release_flow.config import load_config
from release_flow.core.release import RepositorySnapshot, execute_plan, plan_upgrade
from release_flow.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console


def run_upgrade(path: str | None, dry_run: bool, console: Console) -> None:
    """Run the upgrade command.

    Args:
        path: Optional path to the project directory
        dry_run: Only show what would be done
        console: Console for standard output
    """
    project_path = Path(path) if path else Path.cwd()
    config = load_config(project_path)
    repo = GitRepository(project_path, remote=config.remote)
    version_file = repo.path / config.version_file

    snapshot = RepositorySnapshot.capture(repo, version_file)
    plan = plan_upgrade(snapshot, config)

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
