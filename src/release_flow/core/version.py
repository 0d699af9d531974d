"""Four-component version identifiers.

Versions have the shape ``vMAJOR.MINOR.PATCH.BUILD[-label]`` where the
label, when present, is a single alphanumeric token such as ``rc``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from release_flow.exceptions import VersionError

VERSION_PATTERN = re.compile(
    r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)\.(?P<build>\d+)"
    r"(?:-(?P<label>[A-Za-z0-9]+))?$",
    re.ASCII,
)
LABEL_PATTERN = re.compile(r"^[A-Za-z0-9]*$")


@dataclass(frozen=True)
class VersionIdentifier:
    """An immutable ``MAJOR.MINOR.PATCH.BUILD[-label]`` version.

    Attributes:
        major: Release line, only changed by hand
        minor: Incremented each time a release candidate is cut
        patch: Incremented by fix and hotfix commits
        build: Incremented by improvement and generic commits
        label: Empty, or a single alphanumeric token (e.g. "rc")
        prefix: Text rendered before the numbers (e.g. "v")
    """

    major: int
    minor: int
    patch: int
    build: int
    label: str = ""
    prefix: str = "v"

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch", "build"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise VersionError(f"Version component {name} must be a non-negative integer")
        if not LABEL_PATTERN.match(self.label):
            raise VersionError(f"Invalid version label {self.label!r}")

    def __str__(self) -> str:
        return f"{self.prefix}{self.branch_name}"

    @property
    def numbers(self) -> str:
        """Dotted numeric part, e.g. ``2.4.0.0``."""
        return f"{self.major}.{self.minor}.{self.patch}.{self.build}"

    @property
    def branch_name(self) -> str:
        """Version without its prefix, as used for candidate branch names."""
        if self.label:
            return f"{self.numbers}-{self.label}"
        return self.numbers

    def with_label(self, label: str) -> VersionIdentifier:
        return replace(self, label=label)

    def without_label(self) -> VersionIdentifier:
        return replace(self, label="")

    def next_minor(self) -> VersionIdentifier:
        """Open the next minor line: ``(major, minor+1, 0, 0)``, unlabelled."""
        return replace(self, minor=self.minor + 1, patch=0, build=0, label="")

    def bump_patch(self, *, reset_build: bool = True) -> VersionIdentifier:
        build = 0 if reset_build else self.build
        return replace(self, patch=self.patch + 1, build=build)

    def bump_build(self) -> VersionIdentifier:
        return replace(self, build=self.build + 1)


def parse_version(text: str, prefix: str = "v") -> VersionIdentifier:
    """Parse a version string such as ``v2.4.0.0-rc``.

    The prefix is optional in the input; the returned identifier always
    renders with ``prefix``.

    Raises:
        VersionError: If the string is not a four-component version
    """
    candidate = text.strip()
    if prefix and candidate.startswith(prefix):
        candidate = candidate[len(prefix) :]
    match = VERSION_PATTERN.match(candidate)
    if match is None:
        raise VersionError(
            f"Invalid version {text!r}: expected {prefix}MAJOR.MINOR.PATCH.BUILD[-label]"
        )
    return VersionIdentifier(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch")),
        build=int(match.group("build")),
        label=match.group("label") or "",
        prefix=prefix,
    )
