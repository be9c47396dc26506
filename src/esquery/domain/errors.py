"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class QueryBuildError(Exception):
    """Base class for every failure raised while assembling a query.

    Both subclasses signal programmer error (bad input construction), not an
    environmental failure, so callers normally let them propagate.

    Example:
        >>> err = QueryBuildError("cannot build query")
        >>> str(err)
        'cannot build query'
    """


class InvalidIntervalError(QueryBuildError, TypeError):
    """Interval value was neither an ``int`` nor a ``str``.

    Inherits from TypeError so plain ``except TypeError`` handlers catch it.

    Example:
        >>> err = InvalidIntervalError("invalid interval, must be an int or string")
        >>> isinstance(err, TypeError)
        True
    """


class MalformedDocumentError(QueryBuildError, ValueError):
    """Assembled text could not be parsed as JSON during normalization.

    The check happens where the text is normalized, usually in ``query()``,
    which is not necessarily where the broken fragment was produced.

    Attributes:
        document: The text that failed to parse.

    Example:
        >>> err = MalformedDocumentError("unexpected character", document="{,}")
        >>> err.document
        '{,}'
        >>> isinstance(err, ValueError)
        True
    """

    def __init__(self, message: str, *, document: str = "") -> None:
        super().__init__(message)
        self.document = document


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Raised when the ``[esquery]`` section holds values that fail validation.
    Caught at CLI boundaries to provide user-friendly error messages.

    Example:
        >>> err = ConfigurationError("output must be 'compact' or 'pretty'")
        >>> str(err)
        "output must be 'compact' or 'pretty'"
    """


__all__ = [
    "ConfigurationError",
    "InvalidIntervalError",
    "MalformedDocumentError",
    "QueryBuildError",
]
