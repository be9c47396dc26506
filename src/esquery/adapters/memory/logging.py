"""In-memory logging adapter for testing.

CLI tests run many invocations in one process; leaving lib_log_rich
uninitialised keeps their output free of log records.
"""

from __future__ import annotations

from lib_layered_config import Config


def init_logging_in_memory(config: Config) -> None:
    """No-op -- satisfies the InitLogging protocol without side effects."""


__all__ = ["init_logging_in_memory"]
