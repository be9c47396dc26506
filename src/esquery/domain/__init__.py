"""Domain layer - pure query-building logic with no I/O or framework dependencies.

Contents:
    * :mod:`.dsl` - Fragment builders, combinators, and normalizers
    * :mod:`.enums` - Domain enumerations (Direction, OutputStyle, OutputFormat)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .enums import Direction, OutputFormat, OutputStyle
from .errors import ConfigurationError, InvalidIntervalError, MalformedDocumentError, QueryBuildError

__all__ = [
    # Enums
    "Direction",
    "OutputFormat",
    "OutputStyle",
    # Errors
    "ConfigurationError",
    "InvalidIntervalError",
    "MalformedDocumentError",
    "QueryBuildError",
]
