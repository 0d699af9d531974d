"""Pydantic models for the [tool.release-flow] configuration table."""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9]+$")


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class BranchesConfig(_StrictModel):
    """Branch names of the release workflow."""

    develop: str = "develop"
    master: str = "master"
    candidate_suffix: str = Field(
        default="rc",
        description="Label appended to release candidate versions and branch names",
    )

    @field_validator("candidate_suffix")
    @classmethod
    def _suffix_is_token(cls, value: str) -> str:
        if not _TOKEN_PATTERN.match(value):
            raise ValueError("candidate_suffix must be a single alphanumeric token")
        return value


class CommitsConfig(_StrictModel):
    """Tokens used inside ``[type]`` commit tags."""

    fix: str = "fix"
    hotfix: str = "hotfix"
    improvement: str = "imp"
    feature: str = "feat"
    generic: str = "n/a"


class MessagesConfig(_StrictModel):
    """Templates for commits created by release-flow.

    ``{version}`` is replaced by the version without its tag prefix.
    """

    branch_created: str = "[generic] Release {version} branch created."
    upgrade_applied: str = "[generic] Release {version} upgrade applied."

    @field_validator("branch_created", "upgrade_applied")
    @classmethod
    def _has_version_placeholder(cls, value: str) -> str:
        if "{version}" not in value:
            raise ValueError("message template must contain '{version}'")
        return value


class ReleaseFlowConfig(_StrictModel):
    """Root configuration for release-flow."""

    version_file: Path = Path("version.txt")
    tag_prefix: str = "v"
    remote: str = "origin"
    allow_dirty: bool = False

    branches: BranchesConfig = Field(default_factory=BranchesConfig)
    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    messages: MessagesConfig = Field(default_factory=MessagesConfig)
