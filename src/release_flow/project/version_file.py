"""Version file reading and atomic rewriting.

The version file is a single-line text file holding the current version,
e.g. ``v2.4.0.0-rc``. Rewrites go through a temporary file in the same
directory followed by ``os.replace`` so readers never see a partial file.
"""

from __future__ import annotations

import os
import stat
import tempfile
from typing import TYPE_CHECKING

from release_flow.exceptions import VersionFileError

if TYPE_CHECKING:
    from pathlib import Path

    from release_flow.core.version import VersionIdentifier


def read_version_text(file_path: Path) -> str:
    """Return the version string stored in the version file.

    Raises:
        VersionFileError: If the file doesn't exist or is empty
    """
    if not file_path.is_file():
        raise VersionFileError(f"Version file not found: {file_path}")

    text = file_path.read_text(encoding="utf-8").strip()
    if not text:
        raise VersionFileError(f"Version file is empty: {file_path}")
    return text


def write_version_file(file_path: Path, version: VersionIdentifier | str) -> None:
    """Atomically replace the contents of the version file.

    A trailing newline is kept when the existing file has one, and added
    when the file is created.

    Raises:
        VersionFileError: If the file cannot be written
    """
    newline = "\n"
    mode = 0o644
    if file_path.is_file():
        existing = file_path.read_text(encoding="utf-8")
        newline = "\n" if existing.endswith("\n") or not existing else ""
        mode = stat.S_IMODE(file_path.stat().st_mode)

    directory = file_path.parent
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{file_path.name}.", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(f"{version}{newline}")
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, file_path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    except OSError as e:
        raise VersionFileError(f"Could not write version file {file_path}: {e}") from e
