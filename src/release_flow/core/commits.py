"""Commit classification and version folding.

Commit subjects follow the ``[type] subject`` convention, where ``type``
is one of ``fix``, ``hotfix``, ``imp``, ``feat`` or ``n/a``. The commits
made since the last tag are classified oldest first and folded into the
next version:

- ``fix`` / ``hotfix``: patch + 1, build reset to 0
- ``imp`` / ``n/a``: build + 1
- ``feat``: rejected, features never land on release branches
- anything else: rejected as malformed
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from release_flow.exceptions import FeatureCommitError, MalformedCommitError

if TYPE_CHECKING:
    from release_flow.config.models import CommitsConfig
    from release_flow.core.version import VersionIdentifier

# "[tag] rest of the subject"
BRACKET_PATTERN = re.compile(r"^\s*\[(?P<tag>[^\]]*)\]\s*(?P<rest>.*)$")

GENERIC_ALIAS = "generic"

FEATURE_REJECTION = "feature commits forbidden on release branches"
MALFORMED_REJECTION = "malformed commit type in history"


class CommitType(StrEnum):
    """Commit types recognized in ``[type]`` tags."""

    FIX = "fix"
    HOTFIX = "hotfix"
    IMP = "imp"
    FEAT = "feat"
    GENERIC = "n/a"
    INVALID = "invalid"


def _token_map(config: CommitsConfig | None) -> dict[str, CommitType]:
    if config is None:
        tokens = {t.value: t for t in CommitType if t is not CommitType.INVALID}
    else:
        tokens = {
            config.fix: CommitType.FIX,
            config.hotfix: CommitType.HOTFIX,
            config.improvement: CommitType.IMP,
            config.feature: CommitType.FEAT,
            config.generic: CommitType.GENERIC,
        }
    tokens = {token.lower(): commit_type for token, commit_type in tokens.items()}
    tokens.setdefault(GENERIC_ALIAS, CommitType.GENERIC)
    return tokens


def subject_of(message: str) -> str:
    """Return the first non-empty line of a commit message."""
    for line in message.splitlines():
        if line.strip():
            return line.strip()
    return ""


@dataclass(frozen=True)
class ParsedCommit:
    """A commit message split into its type tag and description.

    Attributes:
        message: Full raw commit message
        subject: First non-empty line of the message
        commit_type: Classified type, INVALID when unrecognized
        description: Subject text after the type tag
    """

    message: str
    subject: str
    commit_type: CommitType
    description: str

    @classmethod
    def from_message(
        cls,
        message: str,
        config: CommitsConfig | None = None,
    ) -> ParsedCommit:
        """Parse a commit message.

        The bracket contents are tried first (``[fix] handle null``). When
        they are not a known type, the first word after the bracket is tried
        instead, which covers the ``[TICKET-12] fix handle null`` form.
        """
        subject = subject_of(message)
        match = BRACKET_PATTERN.match(subject)
        if match is None:
            return cls(message, subject, CommitType.INVALID, subject)

        tokens = _token_map(config)
        tag = match.group("tag").strip().lower()
        rest = match.group("rest").strip()

        if tag in tokens:
            return cls(message, subject, tokens[tag], rest)

        first, _, remainder = rest.partition(" ")
        if first.lower() in tokens:
            return cls(message, subject, tokens[first.lower()], remainder.strip())

        return cls(message, subject, CommitType.INVALID, rest)


def classify(message: str, config: CommitsConfig | None = None) -> CommitType:
    """Classify a commit message by its ``[type]`` tag."""
    return ParsedCommit.from_message(message, config).commit_type


def parse_commits(
    messages: Iterable[str],
    config: CommitsConfig | None = None,
) -> list[ParsedCommit]:
    """Parse commit messages, preserving their order."""
    return [ParsedCommit.from_message(message, config) for message in messages]


def apply_commit_type(version: VersionIdentifier, commit_type: CommitType) -> VersionIdentifier:
    """Apply a single commit type to a version.

    Raises:
        FeatureCommitError: For feature commits
        MalformedCommitError: For unrecognized commit types
    """
    if commit_type in (CommitType.FIX, CommitType.HOTFIX):
        return version.bump_patch(reset_build=True)
    if commit_type in (CommitType.IMP, CommitType.GENERIC):
        return version.bump_build()
    if commit_type is CommitType.FEAT:
        raise FeatureCommitError(FEATURE_REJECTION)
    raise MalformedCommitError(MALFORMED_REJECTION)


def fold_version(
    base: VersionIdentifier,
    commit_types: Sequence[CommitType],
) -> VersionIdentifier:
    """Fold commit types, oldest first, into the next version.

    An empty sequence returns ``base`` unchanged. The label of ``base`` is
    kept.

    Raises:
        FeatureCommitError: On the first feature commit
        MalformedCommitError: On the first unrecognized commit type
    """
    version = base
    for commit_type in commit_types:
        version = apply_commit_type(version, commit_type)
    return version


def fold_messages(
    base: VersionIdentifier,
    messages: Sequence[str],
    config: CommitsConfig | None = None,
) -> VersionIdentifier:
    """Classify commit messages (oldest first) and fold them into a version.

    Same as fold_version, but rejections name the offending commit subject.
    """
    version = base
    for parsed in parse_commits(messages, config):
        try:
            version = apply_commit_type(version, parsed.commit_type)
        except (FeatureCommitError, MalformedCommitError) as e:
            raise type(e)(str(e), subject=parsed.subject) from None
    return version


def group_commits_by_type(commits: Iterable[ParsedCommit]) -> dict[CommitType, list[ParsedCommit]]:
    """Group parsed commits by type, preserving order within each group."""
    groups: dict[CommitType, list[ParsedCommit]] = {}
    for commit in commits:
        groups.setdefault(commit.commit_type, []).append(commit)
    return groups
