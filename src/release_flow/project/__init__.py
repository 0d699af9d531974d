"""Project file handling for release-flow."""

from __future__ import annotations

from release_flow.project.version_file import (
    read_version_text,
    write_version_file,
)

__all__ = [
    "read_version_text",
    "write_version_file",
]
