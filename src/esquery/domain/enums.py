"""Type-safe domain enums for sort direction and output styles."""

from __future__ import annotations

from enum import Enum


class Direction(str, Enum):
    """Sort direction used by :func:`esquery.domain.dsl.order`.

    Inherits from str so the value can be rendered directly into a fragment.

    Attributes:
        ASCENDING: Smallest first.
        DESCENDING: Largest first.

    Example:
        >>> Direction.ASCENDING.value
        'asc'
        >>> Direction.DESCENDING == "desc"
        True
    """

    ASCENDING = "asc"
    DESCENDING = "desc"


class OutputStyle(str, Enum):
    """How a normalized document is printed.

    Attributes:
        COMPACT: Single line, no insignificant whitespace.
        PRETTY: Two-space indented.

    Example:
        >>> OutputStyle("pretty") is OutputStyle.PRETTY
        True
    """

    COMPACT = "compact"
    PRETTY = "pretty"


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Defines valid output format choices for the config command.
    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Human-readable TOML-like output format.
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


__all__ = [
    "Direction",
    "OutputFormat",
    "OutputStyle",
]
