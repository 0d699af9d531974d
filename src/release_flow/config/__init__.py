"""Configuration management for release-flow."""

from __future__ import annotations

from release_flow.config.loader import load_config
from release_flow.config.models import (
    BranchesConfig,
    CommitsConfig,
    MessagesConfig,
    ReleaseFlowConfig,
)

__all__ = [
    "BranchesConfig",
    "CommitsConfig",
    "MessagesConfig",
    "ReleaseFlowConfig",
    "load_config",
]
