"""Console script entry point with production wiring.

The ``esquery`` console script lands here; production services are wired
before the CLI in the adapters layer runs.
"""

from __future__ import annotations

from .adapters.cli.main import main as cli_main
from .composition import build_production


def main() -> int:
    """Run the CLI with production services and return its exit code."""
    return cli_main(services_factory=build_production)


__all__ = ["main"]
