"""Console rendering of release plans."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel

from release_flow.core.commits import group_commits_by_type
from release_flow.core.release import ReleaseAction

if TYPE_CHECKING:
    from rich.console import Console

    from release_flow.core.release import ReleasePlan

ACTION_TITLES = {
    ReleaseAction.CREATE_CANDIDATE: "Creating release candidate",
    ReleaseAction.UPGRADE_CANDIDATE: "Upgrading release candidate",
    ReleaseAction.UPGRADE_RELEASE: "Upgrading release",
}


def print_plan_header(plan: ReleasePlan, execute: bool, console: Console) -> None:
    mode_str = "[green]EXECUTING[/]" if execute else "[yellow]DRY-RUN[/]"
    title = ACTION_TITLES[plan.action]
    if plan.previous_version is None:
        console.print(f"\n{mode_str} - {title} [green]{plan.version}[/] (no previous tag)\n")
    else:
        console.print(
            f"\n{mode_str} - {title}: [cyan]{plan.previous_version}[/] -> "
            f"[green]{plan.version}[/]\n"
        )

    if plan.commits:
        grouped = group_commits_by_type(plan.commits)
        summary = ", ".join(f"{len(commits)} {commit_type}" for commit_type, commits in grouped.items())
        console.print(f"  [dim]Commits since last tag:[/] {escape(summary)}")


def print_dry_run(plan: ReleasePlan, version_file: str, console: Console) -> None:
    """Describe the writes a plan would perform."""
    lines = ["[bold]Would make the following changes:[/]", ""]
    if plan.action is ReleaseAction.CREATE_CANDIDATE:
        lines += [
            f"  • Tag current commit as [cyan]{plan.tag_name}[/] and push tags",
            f"  • Create branch [cyan]{escape(plan.new_branch or plan.branch)}[/]",
            f"  • Write [cyan]{plan.version}[/] to [cyan]{escape(version_file)}[/] and commit",
            f"  • Push [cyan]{escape(plan.branch)}[/]",
        ]
    else:
        lines += [
            f"  • Write [cyan]{plan.version}[/] to [cyan]{escape(version_file)}[/] and commit",
            f"  • Tag the commit as [cyan]{plan.tag_name}[/]",
            f"  • Push [cyan]{escape(plan.branch)}[/] and tags",
        ]
    lines += ["", f"[dim]Commit message:[/] {escape(plan.commit_message)}"]

    console.print(Panel("\n".join(lines), title="[yellow]Dry Run Preview[/]", border_style="yellow"))
    console.print("\n[dim]Run without [cyan]--dry-run[/] to apply these changes.[/]")


def print_success(plan: ReleasePlan, console: Console) -> None:
    console.print(
        Panel(
            f"[green]Tagged {plan.tag_name} and pushed {escape(plan.branch)}.[/]",
            title="[green]Done[/]",
            border_style="green",
        )
    )
