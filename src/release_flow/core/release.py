"""Release state machine.

The current branch decides which release action applies:

- ``develop``: ``create`` cuts a new release candidate
  (``vX.Y+1.0.0-rc``), tags develop and branches off it.
- release candidate branches: ``upgrade`` folds the commits since the
  branch's last tag into the version file's version and retags.
- ``master``: ``upgrade`` promotes a merged candidate (label dropped) or
  applies a merged hotfix (patch + 1).
- anything else: rejected.

Planning is split from execution. ``plan_create`` and ``plan_upgrade`` are
pure functions of a RepositorySnapshot; they raise ReleaseRejected
subclasses before anything is written. ``execute_plan`` then performs
every write of an accepted ReleasePlan in order.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from release_flow.core.commits import (
    MALFORMED_REJECTION,
    ParsedCommit,
    fold_messages,
    parse_commits,
    subject_of,
)
from release_flow.core.version import VersionIdentifier, parse_version
from release_flow.exceptions import (
    MalformedCommitError,
    PreconditionError,
    StateError,
    UsageError,
    VersionError,
    VersionFileError,
)
from release_flow.project.version_file import read_version_text, write_version_file

if TYPE_CHECKING:
    from pathlib import Path

    from release_flow.config.models import BranchesConfig, ReleaseFlowConfig
    from release_flow.vcs.git import GitRepository

logger = logging.getLogger(__name__)


class BranchKind(StrEnum):
    """Role of a branch in the release workflow."""

    DEVELOP = "develop"
    RELEASE_CANDIDATE = "release-candidate"
    MASTER = "master"
    OTHER = "other"


class ReleaseAction(StrEnum):
    """Release actions the state machine can select."""

    CREATE_CANDIDATE = "create-candidate"
    UPGRADE_CANDIDATE = "upgrade-candidate"
    UPGRADE_RELEASE = "upgrade-release"


def branch_kind(name: str, branches: BranchesConfig) -> BranchKind:
    """Classify a branch name.

    Exact names win over the candidate suffix, so a branch literally named
    ``develop`` is never treated as a candidate. The suffix must appear as a
    whole word: ``2.4.0.0-rc`` is a candidate, ``feature/source-maps`` is not.
    """
    if name == branches.develop:
        return BranchKind.DEVELOP
    if name == branches.master:
        return BranchKind.MASTER
    if mentions(name, branches.candidate_suffix):
        return BranchKind.RELEASE_CANDIDATE
    return BranchKind.OTHER


def mentions(message: str, token: str) -> bool:
    """True if ``token`` appears in ``message`` as a whole word."""
    return re.search(rf"(?<!\w){re.escape(token)}(?!\w)", message, re.IGNORECASE) is not None


@dataclass(frozen=True)
class RepositorySnapshot:
    """Everything the state machine reads from the repository.

    Attributes:
        branch: Checked-out branch name
        last_tag: Latest tag reachable from HEAD
        first_parent_tag: Latest tag reachable through first parents only
        last_commit_message: Message of the last first-parent commit
        commits_since_tag: Number of commits since ``last_tag``
        commit_messages: Messages of those commits, oldest first
        version_text: Contents of the version file, None if it doesn't exist
        is_dirty: Whether tracked files have uncommitted changes
    """

    branch: str
    last_tag: str | None
    first_parent_tag: str | None
    last_commit_message: str
    commits_since_tag: int
    commit_messages: tuple[str, ...]
    version_text: str | None
    is_dirty: bool = False

    @classmethod
    def capture(cls, repo: GitRepository, version_file: Path) -> RepositorySnapshot:
        """Read a snapshot from a repository and its version file."""
        last_tag = repo.last_tag()
        count = repo.commit_count_since(last_tag)
        return cls(
            branch=repo.current_branch(),
            last_tag=last_tag,
            first_parent_tag=repo.last_tag(first_parent=True),
            last_commit_message=repo.last_commit_message(first_parent=True),
            commits_since_tag=count,
            commit_messages=tuple(repo.commit_messages_since(last_tag, count)),
            version_text=read_version_text(version_file) if version_file.is_file() else None,
            is_dirty=repo.is_dirty(),
        )


@dataclass(frozen=True)
class ReleasePlan:
    """An accepted release action and every value needed to carry it out.

    Attributes:
        action: Selected release action
        branch: Branch pushed once the release commit is made
        version: Version written to the version file and used as tag
        previous_version: Version the new one was derived from
        commit_message: Message of the version file commit
        tag_message: Tag annotation; None means reuse the commit message
        new_branch: Branch to create before committing, if any
        commits: Commits folded into the version, oldest first
    """

    action: ReleaseAction
    branch: str
    version: VersionIdentifier
    previous_version: VersionIdentifier | None
    commit_message: str
    tag_message: str | None = None
    new_branch: str | None = None
    commits: tuple[ParsedCommit, ...] = ()

    @property
    def tag_name(self) -> str:
        return str(self.version)


def _require_clean(snapshot: RepositorySnapshot, config: ReleaseFlowConfig) -> None:
    if snapshot.is_dirty and not config.allow_dirty:
        raise PreconditionError(
            "working copy has uncommitted changes; commit or stash them first"
        )


def _file_version(snapshot: RepositorySnapshot, config: ReleaseFlowConfig) -> VersionIdentifier:
    if snapshot.version_text is None:
        raise VersionFileError(f"Version file not found: {config.version_file}")
    try:
        return parse_version(snapshot.version_text, prefix=config.tag_prefix)
    except VersionError as e:
        raise VersionFileError(f"{config.version_file}: {e}") from e


def plan_create(
    snapshot: RepositorySnapshot,
    message: str,
    config: ReleaseFlowConfig,
) -> ReleasePlan:
    """Plan a new release candidate cut from develop.

    The candidate opens the minor line after the latest first-parent tag:
    ``v2.3.0.0`` becomes ``v2.4.0.0-rc``. Without any tag the base is
    ``v0.0.0.0``.

    Args:
        snapshot: Repository state
        message: Annotation for the candidate tag
        config: Release configuration

    Raises:
        UsageError: If the message is empty
        PreconditionError: If not on develop or the working copy is dirty
    """
    if not message.strip():
        raise UsageError("a message describing the new release must be supplied")

    if branch_kind(snapshot.branch, config.branches) is not BranchKind.DEVELOP:
        raise PreconditionError(
            f"release candidates must be created from {config.branches.develop}"
            f" (current branch: {snapshot.branch})"
        )
    _require_clean(snapshot, config)

    previous = None
    base = VersionIdentifier(0, 0, 0, 0, prefix=config.tag_prefix)
    if snapshot.first_parent_tag:
        previous = parse_version(snapshot.first_parent_tag, prefix=config.tag_prefix)
        base = previous

    version = base.next_minor().with_label(config.branches.candidate_suffix)
    branch = version.branch_name
    return ReleasePlan(
        action=ReleaseAction.CREATE_CANDIDATE,
        branch=branch,
        version=version,
        previous_version=previous,
        commit_message=config.messages.branch_created.format(version=branch),
        tag_message=message,
        new_branch=branch,
    )


def plan_upgrade(snapshot: RepositorySnapshot, config: ReleaseFlowConfig) -> ReleasePlan:
    """Plan an upgrade of the current candidate or release branch.

    Raises:
        PreconditionError: Wrong branch, dirty working copy, or no commits
            since the last tag
        CommitHistoryError: A feature or malformed commit since the last tag
        StateError: The last merge into master has an unknown source
        VersionFileError: The version file is missing or unparseable
    """
    kind = branch_kind(snapshot.branch, config.branches)
    if kind not in (BranchKind.RELEASE_CANDIDATE, BranchKind.MASTER):
        raise PreconditionError(
            "upgrades apply only to release candidate or "
            f"{config.branches.master} branches (current branch: {snapshot.branch})"
        )
    _require_clean(snapshot, config)

    if snapshot.commits_since_tag == 0:
        raise PreconditionError("no changes since last version")

    current = _file_version(snapshot, config)
    if kind is BranchKind.RELEASE_CANDIDATE:
        return _plan_candidate_upgrade(snapshot, current, config)
    return _plan_release_upgrade(snapshot, current, config)


def _plan_candidate_upgrade(
    snapshot: RepositorySnapshot,
    current: VersionIdentifier,
    config: ReleaseFlowConfig,
) -> ReleasePlan:
    if len(snapshot.commit_messages) != snapshot.commits_since_tag:
        # A commit whose message could not be read cannot be classified
        raise MalformedCommitError(MALFORMED_REJECTION)
    folded = fold_messages(current, snapshot.commit_messages, config.commits)
    version = folded.with_label(config.branches.candidate_suffix)
    return ReleasePlan(
        action=ReleaseAction.UPGRADE_CANDIDATE,
        branch=snapshot.branch,
        version=version,
        previous_version=current,
        commit_message=config.messages.upgrade_applied.format(version=version.branch_name),
        commits=tuple(parse_commits(snapshot.commit_messages, config.commits)),
    )


def _plan_release_upgrade(
    snapshot: RepositorySnapshot,
    current: VersionIdentifier,
    config: ReleaseFlowConfig,
) -> ReleasePlan:
    merge_message = snapshot.last_commit_message
    branches = config.branches

    if mentions(merge_message, branches.develop) or mentions(
        merge_message, branches.candidate_suffix
    ):
        # Promoted candidate: released as recorded on the candidate branch
        version = current.without_label()
    elif mentions(merge_message, config.commits.hotfix):
        version = current.bump_patch(reset_build=False).without_label()
    else:
        raise StateError(
            f"unrecognized merge source on {branches.master}: "
            f"{subject_of(merge_message) or '<empty message>'!r}"
        )

    return ReleasePlan(
        action=ReleaseAction.UPGRADE_RELEASE,
        branch=snapshot.branch,
        version=version,
        previous_version=current,
        commit_message=config.messages.upgrade_applied.format(version=version.branch_name),
    )


def execute_plan(
    plan: ReleasePlan,
    repo: GitRepository,
    version_file: Path,
    report: Callable[[str], None] | None = None,
) -> None:
    """Carry out the writes of an accepted plan.

    Args:
        plan: Plan returned by plan_create or plan_upgrade
        repo: Repository to write to
        version_file: Absolute path of the version file
        report: Called with a short description after each step

    Raises:
        GitError: If a git command fails; later steps are not attempted
        VersionFileError: If the version file cannot be written
    """

    def step(description: str) -> None:
        logger.info(description)
        if report is not None:
            report(description)

    if plan.action is ReleaseAction.CREATE_CANDIDATE:
        repo.create_tag(plan.tag_name, plan.tag_message or plan.commit_message)
        step(f"Tagged {plan.tag_name}")
        repo.push_tags()
        step("Pushed tags")
        if plan.new_branch:
            repo.create_branch(plan.new_branch)
            step(f"Created branch {plan.new_branch}")
        write_version_file(version_file, plan.version)
        repo.commit_file(version_file, plan.commit_message)
        step(f"Committed {version_file.name} at {plan.version}")
        repo.push_branch(plan.branch)
        step(f"Pushed {plan.branch}")
        return

    write_version_file(version_file, plan.version)
    repo.commit_file(version_file, plan.commit_message)
    step(f"Committed {version_file.name} at {plan.version}")
    tag_message = plan.tag_message or repo.last_commit_message()
    repo.create_tag(plan.tag_name, tag_message)
    step(f"Tagged {plan.tag_name}")
    repo.push_branch(plan.branch)
    step(f"Pushed {plan.branch}")
    repo.push_tags()
    step("Pushed tags")
