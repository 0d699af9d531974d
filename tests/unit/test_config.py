"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from release_flow.config.loader import (
    extract_release_flow_config,
    find_pyproject_toml,
    load_config,
    load_pyproject_toml,
)
from release_flow.config.models import (
    BranchesConfig,
    CommitsConfig,
    MessagesConfig,
    ReleaseFlowConfig,
)
from release_flow.exceptions import ConfigNotFoundError, ConfigValidationError

PYPROJECT_WITH_CONFIG = """\
[project]
name = "test-project"
version = "1.0.0"

[tool.release-flow]
version_file = "VERSION"
remote = "upstream"

[tool.release-flow.branches]
develop = "dev"
master = "main"
"""


@pytest.fixture
def project_with_config(tmp_path: Path) -> Path:
    (tmp_path / "pyproject.toml").write_text(PYPROJECT_WITH_CONFIG)
    return tmp_path


class TestReleaseFlowConfig:
    """Tests for ReleaseFlowConfig model."""

    def test_default_config(self):
        """Default configuration matches the conventional workflow."""
        config = ReleaseFlowConfig()

        assert config.version_file == Path("version.txt")
        assert config.tag_prefix == "v"
        assert config.remote == "origin"
        assert config.allow_dirty is False

    def test_nested_defaults(self):
        config = ReleaseFlowConfig()

        assert config.branches.develop == "develop"
        assert config.branches.master == "master"
        assert config.branches.candidate_suffix == "rc"
        assert config.commits.generic == "n/a"
        assert config.messages.branch_created == "[generic] Release {version} branch created."

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            ReleaseFlowConfig.model_validate({"versionfile": "VERSION"})


class TestBranchesConfig:
    """Tests for BranchesConfig model."""

    def test_suffix_must_be_token(self):
        with pytest.raises(ValidationError):
            BranchesConfig(candidate_suffix="rc-1")


class TestCommitsConfig:
    """Tests for CommitsConfig model."""

    def test_defaults(self):
        config = CommitsConfig()

        assert (config.fix, config.hotfix, config.improvement, config.feature) == (
            "fix",
            "hotfix",
            "imp",
            "feat",
        )


class TestMessagesConfig:
    """Tests for MessagesConfig model."""

    def test_template_requires_placeholder(self):
        with pytest.raises(ValidationError):
            MessagesConfig(upgrade_applied="[generic] Release upgrade applied.")


class TestLoadPyprojectToml:
    """Tests for load_pyproject_toml()."""

    def test_load_valid_toml(self, project_with_config: Path):
        data = load_pyproject_toml(project_with_config / "pyproject.toml")

        assert data["project"]["name"] == "test-project"

    def test_load_nonexistent_raises(self, tmp_path: Path):
        with pytest.raises(ConfigNotFoundError):
            load_pyproject_toml(tmp_path / "nonexistent.toml")

    def test_load_invalid_toml_raises(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.release-flow\n")

        with pytest.raises(ConfigValidationError):
            load_pyproject_toml(path)


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml()."""

    def test_find_in_current_dir(self, project_with_config: Path):
        assert find_pyproject_toml(project_with_config).name == "pyproject.toml"

    def test_find_in_parent_dir(self, project_with_config: Path):
        subdir = project_with_config / "src" / "package"
        subdir.mkdir(parents=True)

        found = find_pyproject_toml(subdir)

        assert found == (project_with_config / "pyproject.toml").resolve()


class TestExtractReleaseFlowConfig:
    """Tests for extract_release_flow_config()."""

    def test_extract_existing_config(self):
        pyproject = {"tool": {"release-flow": {"remote": "upstream"}}}

        assert extract_release_flow_config(pyproject) == {"remote": "upstream"}

    def test_extract_missing_config(self):
        assert extract_release_flow_config({"project": {"name": "test"}}) == {}


class TestLoadConfig:
    """Tests for load_config()."""

    def test_load_with_config(self, project_with_config: Path):
        config = load_config(project_with_config)

        assert config.version_file == Path("VERSION")
        assert config.remote == "upstream"
        assert config.branches.develop == "dev"
        assert config.branches.master == "main"
        assert config.branches.candidate_suffix == "rc"

    def test_load_defaults_when_no_table(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "test"\n')

        assert load_config(tmp_path) == ReleaseFlowConfig()

    def test_invalid_table_raises(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text('[tool.release-flow]\nallow_dirty = "maybe"\n')

        with pytest.raises(ConfigValidationError, match="tool.release-flow"):
            load_config(tmp_path)
