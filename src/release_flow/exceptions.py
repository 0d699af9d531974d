"""Exception hierarchy for release-flow.

Every error raised by release-flow derives from ReleaseFlowError and is
terminal for the run. The CLI reports ``str(error)`` on a single line and
exits with ``error.exit_code``.
"""

from __future__ import annotations


class ReleaseFlowError(Exception):
    """Base exception for all release-flow errors."""

    exit_code: int = 1


class UsageError(ReleaseFlowError):
    """Bad or missing command-line arguments."""

    exit_code = 2


# Configuration


class ConfigError(ReleaseFlowError):
    """Base class for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """pyproject.toml could not be found or read."""


class ConfigValidationError(ConfigError):
    """The [tool.release-flow] table is invalid."""


# Versions and files


class VersionError(ReleaseFlowError):
    """A version string or component is invalid."""


class ProjectError(ReleaseFlowError):
    """Base class for errors touching project files."""


class VersionFileError(ProjectError):
    """The version file is missing, empty or cannot be rewritten."""


# Git


class GitError(ReleaseFlowError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        self.stderr = stderr
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


# Release decisions


class ReleaseRejected(ReleaseFlowError):
    """The requested release action cannot be applied to the repository."""


class PreconditionError(ReleaseRejected):
    """Wrong branch for the action, nothing to release, or a dirty tree."""


class CommitHistoryError(ReleaseRejected):
    """A commit since the last tag prevents the version from being computed."""

    def __init__(self, message: str, subject: str | None = None) -> None:
        self.subject = subject
        if subject:
            message = f"{message} ({subject!r})"
        super().__init__(message)


class FeatureCommitError(CommitHistoryError):
    """A feature commit was found on a release branch."""


class MalformedCommitError(CommitHistoryError):
    """A commit message does not carry a recognized [type] tag."""


class StateError(ReleaseRejected):
    """The repository is in a state no release action is defined for."""
