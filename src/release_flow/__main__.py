"""Allow running as ``python -m release_flow``."""

from __future__ import annotations

from release_flow.cli.app import main

if __name__ == "__main__":
    main()
