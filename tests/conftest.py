"""Shared fixtures for the release-flow test suite."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from release_flow.config.models import ReleaseFlowConfig
from release_flow.core.release import RepositorySnapshot
from release_flow.vcs.git import GitRepository

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def git(cwd: Path, *args: str) -> str:
    """Run a git command in ``cwd`` and return its stripped stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def commit(cwd: Path, message: str, filename: str = "CHANGES.txt") -> None:
    """Append to a file and commit it with ``message``."""
    target = cwd / filename
    with target.open("a", encoding="utf-8") as f:
        f.write(f"{message}\n")
    git(cwd, "add", filename)
    git(cwd, "commit", "-m", message)


@pytest.fixture
def config() -> ReleaseFlowConfig:
    return ReleaseFlowConfig()


@pytest.fixture
def make_snapshot():
    """Factory for RepositorySnapshot with sensible defaults."""

    def _make(**overrides) -> RepositorySnapshot:
        values = {
            "branch": "develop",
            "last_tag": "v2.3.0.0",
            "first_parent_tag": "v2.3.0.0",
            "last_commit_message": "[imp] tidy up",
            "commits_since_tag": 1,
            "commit_messages": ("[imp] tidy up",),
            "version_text": "v2.3.0.0",
            "is_dirty": False,
        }
        values.update(overrides)
        return RepositorySnapshot(**values)

    return _make


@pytest.fixture
def mock_repo(tmp_path: Path) -> MagicMock:
    """Create a mock GitRepository."""
    repo = MagicMock(spec=GitRepository)
    repo.path = tmp_path
    repo.remote = "origin"
    return repo


@pytest.fixture
def remote_repo(tmp_path: Path) -> Path:
    """A bare repository used as ``origin``."""
    remote = tmp_path / "remote.git"
    remote.mkdir()
    git(remote, "init", "--bare", "--quiet")
    return remote


@pytest.fixture
def released_repo(tmp_path: Path, remote_repo: Path) -> Path:
    """A clone with master tagged v2.3.0.0 and a develop branch checked out.

    The version file holds ``v2.3.0.0`` and every branch has been pushed.
    """
    repo = tmp_path / "work"
    repo.mkdir()
    git(repo, "init", "--quiet")
    git(repo, "symbolic-ref", "HEAD", "refs/heads/master")
    git(repo, "config", "user.name", "Release Bot")
    git(repo, "config", "user.email", "release@example.com")
    git(repo, "config", "commit.gpgsign", "false")
    git(repo, "config", "tag.gpgsign", "false")
    git(repo, "remote", "add", "origin", str(remote_repo))

    (repo / "version.txt").write_text("v2.3.0.0\n")
    git(repo, "add", "version.txt")
    git(repo, "commit", "-m", "[n/a] Initial release")
    git(repo, "tag", "-a", "v2.3.0.0", "-m", "Initial release")
    git(repo, "push", "--quiet", "origin", "master", "--tags")

    git(repo, "checkout", "--quiet", "-b", "develop")
    commit(repo, "[feat] Add export command")
    git(repo, "push", "--quiet", "origin", "develop")
    return repo
