"""CLI command implementations."""

from __future__ import annotations

from release_flow.cli.commands.create import run_create
from release_flow.cli.commands.upgrade import run_upgrade

__all__ = ["run_create", "run_upgrade"]
