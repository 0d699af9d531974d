"""Core business logic for release-flow.

This module contains the fundamental building blocks:
- Four-component version identifiers
- ``[type] subject`` commit classification and version folding
- The develop / release candidate / master release state machine
"""

from __future__ import annotations

from release_flow.core.commits import (
    CommitType,
    ParsedCommit,
    classify,
    fold_messages,
    fold_version,
    parse_commits,
)
from release_flow.core.release import (
    BranchKind,
    ReleaseAction,
    ReleasePlan,
    RepositorySnapshot,
    branch_kind,
    execute_plan,
    plan_create,
    plan_upgrade,
)
from release_flow.core.version import VersionIdentifier, parse_version

__all__ = [
    # Release
    "BranchKind",
    # Commits
    "CommitType",
    "ParsedCommit",
    "ReleaseAction",
    "ReleasePlan",
    "RepositorySnapshot",
    # Version
    "VersionIdentifier",
    "branch_kind",
    "classify",
    "execute_plan",
    "fold_messages",
    "fold_version",
    "parse_commits",
    "parse_version",
    "plan_create",
    "plan_upgrade",
]
