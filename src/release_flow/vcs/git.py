"""Git repository access through the ``git`` command line.

GitRepository is the only place release-flow talks to git. Reads return
plain strings and integers; writes raise GitError when git fails. Nothing
is retried: a failed push ends the run.

The working copy is assumed to be used by a single release-flow
invocation at a time.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from release_flow.exceptions import GitError

logger = logging.getLogger(__name__)

# git describe stderr when no tag is reachable from HEAD
_NO_TAG_MARKERS = (
    "No names found",
    "No annotated tags can describe",
    "No tags can describe",
)

_MESSAGE_SEPARATOR = "\x00"


class GitRepository:
    """A local git working copy.

    Args:
        path: Any directory inside the working copy
        remote: Remote that branches and tags are pushed to
    """

    def __init__(self, path: Path | None = None, remote: str = "origin") -> None:
        start = path or Path.cwd()
        self.remote = remote
        try:
            top_level = self._git("rev-parse", "--show-toplevel", cwd=start)
        except GitError as e:
            raise GitError(f"Not a git repository: {start}", stderr=e.stderr) from e
        except FileNotFoundError as e:
            raise GitError("git executable not found on PATH") from e
        self.path = Path(top_level)

    def _git(self, *args: str, cwd: Path | None = None) -> str:
        command = ["git", *args]
        logger.debug("Running %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=True,
                cwd=cwd or self.path,
            )
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout.strip()

    # Reads

    def current_branch(self) -> str:
        """Name of the checked-out branch, ``HEAD`` when detached."""
        return self._git("rev-parse", "--abbrev-ref", "HEAD")

    def last_tag(self, first_parent: bool = False) -> str | None:
        """Most recent annotated tag reachable from HEAD.

        Args:
            first_parent: Only follow the first parent of merge commits

        Returns:
            Tag name, or None if no tag is reachable
        """
        args = ["describe", "--abbrev=0"]
        if first_parent:
            args.insert(1, "--first-parent")
        try:
            return self._git(*args)
        except GitError as e:
            if e.stderr and any(marker in e.stderr for marker in _NO_TAG_MARKERS):
                return None
            raise

    def last_commit_message(self, first_parent: bool = False) -> str:
        args = ["log", "-n", "1", "--format=%B"]
        if first_parent:
            args.insert(1, "--first-parent")
        return self._git(*args)

    def commit_count_since(self, tag: str | None) -> int:
        """Number of commits reachable from HEAD but not from ``tag``."""
        revision = f"{tag}..HEAD" if tag else "HEAD"
        return int(self._git("rev-list", "--count", revision))

    def commit_messages_since(self, tag: str | None, count: int) -> list[str]:
        """Messages of the last ``count`` commits after ``tag``, oldest first."""
        if count <= 0:
            return []
        args = ["log", "--reverse", "-n", str(count), "--format=%B%x00"]
        if tag:
            args.append(f"{tag}..HEAD")
        output = self._git(*args)
        # Each message is terminated by a separator; empty messages are kept
        pieces = output.split(_MESSAGE_SEPARATOR)[:-1]
        return [message.strip() for message in pieces]

    def is_dirty(self) -> bool:
        """True if tracked files have uncommitted changes."""
        return bool(self._git("status", "--porcelain", "--untracked-files=no"))

    # Writes

    def create_branch(self, name: str) -> None:
        """Create ``name`` at HEAD and check it out."""
        self._git("checkout", "-b", name)

    def create_tag(self, name: str, message: str) -> None:
        """Create an annotated tag at HEAD."""
        self._git("tag", "-a", name, "-m", message)

    def commit_file(self, path: Path, message: str) -> None:
        """Stage a single file and commit it."""
        self._git("add", "--", str(path))
        self._git("commit", "-m", message)

    def push_branch(self, name: str) -> None:
        self._git("push", self.remote, name)

    def push_tags(self) -> None:
        self._git("push", self.remote, "--tags")
