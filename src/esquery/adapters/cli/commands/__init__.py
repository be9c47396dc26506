"""CLI command implementations.

Collects all subcommand functions and re-exports them for registration
with the root CLI group.

Contents:
    * Info command from :mod:`.info`
    * Config command from :mod:`.config`
    * Document commands from :mod:`.build_cmd` and :mod:`.normalize_cmd`
    * Time-zone command from :mod:`.timezone_cmd`
"""

from __future__ import annotations

from .build_cmd import cli_build
from .config import cli_config
from .info import cli_info
from .normalize_cmd import cli_normalize
from .timezone_cmd import cli_timezone

__all__ = [
    "cli_build",
    "cli_config",
    "cli_info",
    "cli_normalize",
    "cli_timezone",
]
