"""Composable builders for aggregation query documents.

Every builder returns a *fragment*: a string of JSON text holding one
key/value pair, object, or array element, or the empty string meaning
"leave me out". Combinators join fragments with :func:`join`, which drops
empty fragments so optional pieces vanish without leaving a stray comma.
:func:`query` wraps the result in the root object and normalizes it, which is
also where broken composition surfaces as :class:`MalformedDocumentError`.

Contents:
    * Normalizers - :func:`compress`, :func:`pretty`
    * Combinators - :func:`join`, :func:`clean`, :func:`when`, :func:`query`,
      :func:`filter_`, :func:`aggs`, :func:`agg`
    * Filters - :func:`range_`, :func:`term`
    * Aggregations - :func:`terms`, :func:`sum_`, :func:`avg`, :func:`min_`,
      :func:`max_`, :func:`stats`, :func:`percentiles`, :func:`histogram`,
      :func:`date_histogram`
    * Options - :func:`time_zone`, :func:`interval`, :func:`min_doc_count`,
      :func:`missing`, :func:`extended_bounds`, :func:`order`

Example:
    >>> doc = query(
    ...     filter_(range_("now-1d", "now"), term("user", "tj"))(
    ...         aggs(agg("total", sum_("bytes"))),
    ...     )
    ... )
    >>> doc.startswith('{"aggs":{"total":{"sum":{"field":"bytes"}}}')
    True
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import orjson

from .enums import Direction
from .errors import InvalidIntervalError, MalformedDocumentError

logger = logging.getLogger(__name__)

#: Separator placed between sibling fragments.
FRAGMENT_SEPARATOR = ",\n"

#: Root marker: return no hits, aggregations only.
SIZE_ZERO = '"size": 0'

#: Field used by :func:`range_` when none is given.
DEFAULT_RANGE_FIELD = "timestamp"

Bound = str | int | float


# ---------------------------------------------------------------------------
# Normalizers
# ---------------------------------------------------------------------------


def _parse(text: str | bytes) -> object:
    """Parse *text* as JSON or raise :class:`MalformedDocumentError`.

    Bytes are validated as UTF-8 by the parser itself.
    """
    try:
        return orjson.loads(text)
    except orjson.JSONDecodeError as exc:
        logger.debug("Rejected malformed query document", extra={"error": str(exc)})
        raise MalformedDocumentError(f"malformed query document: {exc}", document=_as_text(text)) from exc


def _as_text(text: str | bytes) -> str:
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return text


def _render(text: str | bytes, option: int) -> str:
    parsed = _parse(text)
    try:
        return orjson.dumps(parsed, option=option).decode()
    except orjson.JSONEncodeError as exc:
        # numbers the parser accepted but cannot write back, e.g. integers beyond 64 bits
        raise MalformedDocumentError(f"malformed query document: {exc}", document=_as_text(text)) from exc


def compress(text: str | bytes) -> str:
    """Return *text* re-serialized as compact JSON with sorted keys.

    Args:
        text: JSON text, typically an assembled document. UTF-8 bytes are
            accepted as well.

    Returns:
        Canonical single-line JSON.

    Raises:
        MalformedDocumentError: If *text* is not valid JSON, is not valid
            UTF-8, or nests arrays and objects deeper than 1024 levels (the
            parser's recursion limit).

    Example:
        >>> compress('{ "b": 1,\\n "a": [1, 2] }')
        '{"a":[1,2],"b":1}'
    """
    return _render(text, orjson.OPT_SORT_KEYS)


def pretty(text: str | bytes) -> str:
    """Return *text* re-serialized with two-space indentation and sorted keys.

    Accepts the same input as :func:`compress`, with the same nesting limit.

    Raises:
        MalformedDocumentError: If *text* is not valid JSON.

    Example:
        >>> print(pretty('{"size":0}'))
        {
          "size": 0
        }
    """
    return _render(text, orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2)


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


def clean(fragments: Iterable[str]) -> list[str]:
    """Drop empty fragments, such as the ones :func:`when` yields for false conditions."""
    return [fragment for fragment in fragments if fragment != ""]


def join(fragments: Iterable[str]) -> str:
    """Join non-empty *fragments* with a comma and newline, keeping their order.

    Example:
        >>> join(['"a": 1', "", '"b": 2'])
        '"a": 1,\\n"b": 2'
        >>> join(["", ""])
        ''
    """
    return FRAGMENT_SEPARATOR.join(clean(fragments))


def when(cond: bool, *fragments: str) -> str:
    """Return *fragments* joined when *cond* holds, otherwise the empty fragment.

    Example:
        >>> when(True, '"a": 1', '"b": 2') == join(['"a": 1', '"b": 2'])
        True
        >>> when(False, '"a": 1')
        ''
    """
    if cond:
        return join(fragments)
    return ""


def query(*children: str) -> str:
    """Build the root document from *children* and compress it.

    The document always carries ``"size": 0``. This is where malformed
    composition is detected.

    Raises:
        MalformedDocumentError: If the assembled text is not valid JSON.

    Example:
        >>> query(aggs(agg("users", terms("user", 5))))
        '{"aggs":{"users":{"terms":{"field":"user","size":5}}},"size":0}'
    """
    return compress("{\n" + join([SIZE_ZERO, *children]) + "\n}")


def filter_(*filters: str) -> Callable[..., str]:
    """Return a builder placing *filters* in a boolean AND filter next to its children.

    The returned callable can be reused for several document bodies.

    Args:
        *filters: Filter clause fragments such as :func:`range_` or :func:`term`.

    Returns:
        Callable taking further child fragments (usually :func:`aggs`) and
        returning the combined fragment.

    Example:
        >>> with_filters = filter_(term("user", "tj"))
        >>> compress("{" + with_filters() + "}")
        '{"filter":{"bool":{"filter":[{"term":{"user":"tj"}}]}}}'
    """
    block = f"""
"filter": {{
  "bool": {{
    "filter": [
      {join(filters)}
    ]
  }}
}}"""

    def apply(*children: str) -> str:
        return join([block, join(children)])

    return apply


def aggs(*children: str) -> str:
    """Wrap named aggregations in the ``aggs`` container."""
    return f"""
"aggs": {{
  {join(children)}
}}"""


def agg(name: str, *children: str) -> str:
    """Wrap *children* under the aggregation *name*.

    Sibling names are not checked; a repeated name resolves last-wins when
    the document is normalized.

    Example:
        >>> compress("{" + agg("total", sum_("bytes")) + "}")
        '{"total":{"sum":{"field":"bytes"}}}'
    """
    return f"""
{_literal(name)}: {{
  {join(children)}
}}"""


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def _literal(value: Bound) -> str:
    """Render *value* as a JSON literal.

    Integers are written out digit for digit, so values beyond 64 bits still
    build; the normalizer decides whether they can be re-serialized.

    Example:
        >>> _literal(2**64)
        '18446744073709551616'
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return orjson.dumps(value).decode()


def range_(gte: Bound, lte: Bound, field: str = DEFAULT_RANGE_FIELD) -> str:
    """Range filter on *field* between *gte* and *lte*, inclusive.

    Bounds are not validated; date math strings and numbers pass through.

    Example:
        >>> compress(range_("now-7d", "now"))
        '{"range":{"timestamp":{"gte":"now-7d","lte":"now"}}}'
        >>> compress(range_(1, 10, field="status"))
        '{"range":{"status":{"gte":1,"lte":10}}}'
    """
    return f"""{{
  "range": {{
    {_literal(field)}: {{
      "gte": {_literal(gte)},
      "lte": {_literal(lte)}
    }}
  }}
}}"""


def term(field: str, value: str) -> str:
    """Exact-match filter of *field* against *value*."""
    return f"""{{
  "term": {{
    {_literal(field)}: {_literal(value)}
  }}
}}"""


# ---------------------------------------------------------------------------
# Aggregations
# ---------------------------------------------------------------------------


def _field_agg(kind: str, field: str) -> str:
    return f"""
{_literal(kind)}: {{
  "field": {_literal(field)}
}}"""


def terms(field: str, size: int) -> str:
    """Terms aggregation returning the *size* most frequent values of *field*."""
    return f"""
"terms": {{
  "field": {_literal(field)},
  "size": {size:d}
}}"""


def sum_(field: str) -> str:
    """Sum aggregation of *field*."""
    return _field_agg("sum", field)


def avg(field: str) -> str:
    """Average aggregation of *field*."""
    return _field_agg("avg", field)


def min_(field: str) -> str:
    """Minimum aggregation of *field*."""
    return _field_agg("min", field)


def max_(field: str) -> str:
    """Maximum aggregation of *field*."""
    return _field_agg("max", field)


def stats(field: str) -> str:
    """Combined count/min/max/avg/sum aggregation of *field*."""
    return _field_agg("stats", field)


def _join_floats(values: Iterable[float]) -> str:
    return ", ".join(f"{value:0.2f}" for value in values)


def percentiles(field: str, *percents: float) -> str:
    """Percentiles aggregation of *field*, optionally restricted to *percents*.

    Break-points keep the caller's order and are rendered with two decimals.

    Example:
        >>> '"percents": [50.00, 95.50, 99.00]' in percentiles("latency", 50, 95.5, 99)
        True
        >>> "percents" in percentiles("latency")
        False
    """
    if percents:
        return f"""
"percentiles": {{
  "field": {_literal(field)},
  "percents": [{_join_floats(percents)}]
}}"""
    return _field_agg("percentiles", field)


def date_histogram(field: str, *options: str) -> str:
    """Date histogram of *field*; *options* are fragments such as :func:`interval`.

    Example:
        >>> compress("{" + date_histogram("timestamp", interval("1d"), when(False, missing(0))) + "}")
        '{"date_histogram":{"field":"timestamp","interval":"1d"}}'
    """
    return _histogram("date_histogram", field, options)


def histogram(field: str, *options: str) -> str:
    """Numeric histogram of *field*; *options* are fragments such as :func:`interval`."""
    return _histogram("histogram", field, options)


def _histogram(kind: str, field: str, options: Iterable[str]) -> str:
    body = join([f'"field": {_literal(field)}', *options])
    return f"""
{_literal(kind)}: {{
  {body}
}}"""


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


def _format_offset(moment: datetime) -> str:
    """Return the UTC offset of *moment* as ``+HH:MM`` / ``-HH:MM``."""
    delta = moment.utcoffset() or timedelta(0)
    total_minutes = int(delta.total_seconds()) // 60
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def _lookup_zone(name: str) -> tzinfo | None:
    """Look *name* up in the system time-zone database, ``None`` on a miss."""
    if name == "":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def time_zone(name: str | None = None) -> str:
    """Time-zone option holding a UTC offset.

    Resolution order:

    1. no *name*: the offset of the local zone right now.
    2. *name* found in the time-zone database: that region's current offset.
    3. otherwise *name* is taken as a literal offset such as ``"-08:00"``.

    Unknown region names therefore pass through unchanged instead of raising.

    Example:
        >>> time_zone("-08:00")
        '"time_zone": "-08:00"'
        >>> time_zone("")
        '"time_zone": "+00:00"'
        >>> time_zone("Not/AZone")
        '"time_zone": "Not/AZone"'
    """
    if name is None:
        offset = _format_offset(datetime.now().astimezone())
    else:
        zone = _lookup_zone(name)
        if zone is None:
            logger.debug("Time zone not in database, using it as a literal offset", extra={"time_zone": name})
            offset = name
        else:
            offset = _format_offset(datetime.now(zone))
    return f'"time_zone": {_literal(offset)}'


def interval(value: int | str) -> str:
    """Interval option: a number such as ``50`` or a unit string such as ``"1d"``.

    Raises:
        InvalidIntervalError: If *value* is neither ``int`` nor ``str``.

    Example:
        >>> interval(10)
        '"interval": 10'
        >>> interval("1h")
        '"interval": "1h"'
    """
    if isinstance(value, bool) or not isinstance(value, int | str):
        raise InvalidIntervalError(f"invalid interval {value!r}, must be an int or string")
    return f'"interval": {_literal(value)}'


def min_doc_count(n: int) -> str:
    return f'"min_doc_count": {n:d}'


def missing(n: int) -> str:
    return f'"missing": {n:d}'


def extended_bounds(min_: int, max_: int) -> str:
    """Force histogram buckets to span *min_* to *max_*."""
    return f""""extended_bounds": {{
  "min": {min_:d},
  "max": {max_:d}
}}"""


def order(field: str, direction: Direction | str) -> str:
    """Order buckets by *field* in *direction*.

    Raises:
        ValueError: If *direction* is not ``"asc"`` or ``"desc"``.

    Example:
        >>> compress("{" + order("_count", Direction.DESCENDING) + "}")
        '{"order":{"_count":"desc"}}'
    """
    return f""""order": {{
  {_literal(field)}: {_literal(Direction(direction).value)}
}}"""


__all__ = [
    "DEFAULT_RANGE_FIELD",
    "FRAGMENT_SEPARATOR",
    "SIZE_ZERO",
    "agg",
    "aggs",
    "avg",
    "clean",
    "compress",
    "date_histogram",
    "extended_bounds",
    "filter_",
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
    "query",
    "range_",
    "stats",
    "sum_",
    "term",
    "terms",
    "time_zone",
    "when",
]
