"""Command line interface for release-flow."""

from __future__ import annotations

from release_flow.cli.app import app, main

__all__ = ["app", "main"]
