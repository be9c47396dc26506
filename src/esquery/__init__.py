"""Public package surface exposing the query builders, errors, and configuration.

This module provides the stable public API for the package, routing imports
through the proper architectural layers:
- Domain exports: fragment builders, combinators, normalizers, error types
- Composition exports: Wired adapter services (configuration)
- Metadata: Package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Composition exports (wired adapters)
from .composition import get_config

# Domain exports
from .domain.dsl import (
    agg,
    aggs,
    avg,
    clean,
    compress,
    date_histogram,
    extended_bounds,
    filter_,
    histogram,
    interval,
    join,
    max_,
    min_,
    min_doc_count,
    missing,
    order,
    percentiles,
    pretty,
    query,
    range_,
    stats,
    sum_,
    term,
    terms,
    time_zone,
    when,
)
from .domain.enums import Direction
from .domain.errors import InvalidIntervalError, MalformedDocumentError, QueryBuildError

__all__ = [
    "Direction",
    "InvalidIntervalError",
    "MalformedDocumentError",
    "QueryBuildError",
    "agg",
    "aggs",
    "avg",
    "clean",
    "compress",
    "date_histogram",
    "extended_bounds",
    "filter_",
    "get_config",
    "histogram",
    "interval",
    "join",
    "max_",
    "min_",
    "min_doc_count",
    "missing",
    "order",
    "percentiles",
    "pretty",
    "print_info",
    "query",
    "range_",
    "stats",
    "sum_",
    "term",
    "terms",
    "time_zone",
    "when",
]
