"""Tests for four-component version identifiers."""

from __future__ import annotations

import pytest

from release_flow.core.version import VersionIdentifier, parse_version
from release_flow.exceptions import VersionError


class TestParseVersion:
    """Tests for parse_version()."""

    def test_parse_release(self):
        """Parse an unlabelled version."""
        v = parse_version("v2.3.0.0")

        assert (v.major, v.minor, v.patch, v.build) == (2, 3, 0, 0)
        assert v.label == ""

    def test_parse_candidate(self):
        """Parse a release candidate version."""
        v = parse_version("v2.4.0.0-rc")

        assert v == VersionIdentifier(2, 4, 0, 0, label="rc")

    def test_parse_multi_digit_components(self):
        """Components are not limited to a single digit."""
        v = parse_version("v10.12.31.107")

        assert (v.major, v.minor, v.patch, v.build) == (10, 12, 31, 107)

    def test_parse_without_prefix(self):
        """The prefix is optional in the input."""
        assert parse_version("2.4.0.0-rc") == parse_version("v2.4.0.0-rc")

    def test_parse_strips_whitespace(self):
        """Trailing newlines from files are ignored."""
        assert str(parse_version("  v1.2.3.4\n")) == "v1.2.3.4"

    def test_parse_custom_prefix(self):
        """A configured prefix is stripped and rendered back."""
        v = parse_version("release-1.2.3.4", prefix="release-")

        assert v.numbers == "1.2.3.4"
        assert str(v) == "release-1.2.3.4"

    @pytest.mark.parametrize(
        "text",
        ["", "v1.2.3", "v1.2.3.4.5", "v1.2.x.4", "v1.2.3.4-rc-1", "v1.2.3.4-", "x1.2.3.4"],
    )
    def test_parse_invalid_raises(self, text: str):
        """Malformed versions raise VersionError."""
        with pytest.raises(VersionError):
            parse_version(text)

    @pytest.mark.parametrize("text", ["v٢.3.0.0", "v2.3.0.１"])
    def test_parse_non_ascii_digits_raises(self, text: str):
        """Only ASCII digits are version numbers."""
        with pytest.raises(VersionError):
            parse_version(text)


class TestVersionIdentifier:
    """Tests for VersionIdentifier."""

    def test_str_with_label(self):
        """Serialize as vMAJOR.MINOR.PATCH.BUILD-label."""
        assert str(VersionIdentifier(2, 4, 0, 0, label="rc")) == "v2.4.0.0-rc"

    def test_str_without_label(self):
        assert str(VersionIdentifier(2, 4, 1, 3)) == "v2.4.1.3"

    def test_branch_name_has_no_prefix(self):
        """Candidate branches are named after the version without 'v'."""
        assert VersionIdentifier(2, 4, 0, 0, label="rc").branch_name == "2.4.0.0-rc"

    def test_negative_component_raises(self):
        with pytest.raises(VersionError):
            VersionIdentifier(1, -1, 0, 0)

    def test_invalid_label_raises(self):
        """Labels must be a single alphanumeric token."""
        with pytest.raises(VersionError):
            VersionIdentifier(1, 0, 0, 0, label="rc-1")

    def test_next_minor(self):
        """Opening a minor line resets patch and build and drops the label."""
        v = VersionIdentifier(2, 3, 5, 7, label="rc").next_minor()

        assert v == VersionIdentifier(2, 4, 0, 0)

    def test_bump_patch_resets_build(self):
        assert VersionIdentifier(2, 3, 1, 4).bump_patch() == VersionIdentifier(2, 3, 2, 0)

    def test_bump_patch_keeps_build(self):
        v = VersionIdentifier(2, 3, 1, 4).bump_patch(reset_build=False)

        assert v == VersionIdentifier(2, 3, 2, 4)

    def test_bump_build(self):
        assert VersionIdentifier(2, 3, 1, 4).bump_build() == VersionIdentifier(2, 3, 1, 5)

    def test_label_helpers(self):
        v = VersionIdentifier(2, 3, 1, 4)

        assert v.with_label("rc").label == "rc"
        assert v.with_label("rc").without_label() == v
