"""Assemble an aggregation query document from command-line options.

Contents:
    * :func:`cli_build` - Build a document with filters and aggregations.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from esquery.adapters.config.settings import QuerySettings
from esquery.domain.dsl import (
    agg,
    aggs,
    date_histogram,
    filter_,
    interval,
    query,
    range_,
    sum_,
    term,
    time_zone,
    when,
)

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context, get_query_settings
from ._output import STYLE_CHOICES, echo_document, resolve_style

logger = logging.getLogger(__name__)

#: Aggregation name used for the ``--histogram`` bucket.
HISTOGRAM_AGG_NAME = "histogram"


def _split_pair(raw: str, *, option: str) -> tuple[str, str]:
    """Split ``LEFT=RIGHT``; both sides must be non-empty.

    Raises:
        click.BadParameter: If the ``=`` or either side is missing.

    Example:
        >>> _split_pair("user=tj", option="--term")
        ('user', 'tj')
    """
    left, sep, right = raw.partition("=")
    if not sep or not left or not right:
        raise click.BadParameter(f"expected KEY=VALUE, got {raw!r}", param_hint=option)
    return left, right


def _coerce_interval(raw: str) -> int | str:
    """Numeric intervals become ``int``; unit strings such as ``1d`` stay text.

    Example:
        >>> _coerce_interval("50"), _coerce_interval("1d")
        (50, '1d')
    """
    try:
        return int(raw)
    except ValueError:
        return raw


def build_document(
    settings: QuerySettings,
    *,
    gte: str | None,
    lte: str | None,
    terms: tuple[tuple[str, str], ...] = (),
    sums: tuple[tuple[str, str], ...] = (),
    histogram_field: str | None = None,
    histogram_interval: str = "1d",
) -> str:
    """Compose the compact document described by the CLI options.

    Example:
        >>> build_document(QuerySettings(), gte=None, lte=None, sums=(("total", "bytes"),))
        '{"aggs":{"total":{"sum":{"field":"bytes"}}},"size":0}'
    """
    has_range = gte is not None and lte is not None
    filters = [
        when(has_range, range_(gte or "", lte or "", field=settings.timestamp_field)),
        *(term(field, value) for field, value in terms),
    ]
    named = [agg(name, sum_(field)) for name, field in sums]
    if histogram_field is not None:
        named.append(
            agg(
                HISTOGRAM_AGG_NAME,
                date_histogram(
                    histogram_field,
                    interval(_coerce_interval(histogram_interval)),
                    time_zone(settings.time_zone),
                ),
            )
        )
    children = [when(bool(named), aggs(*named))]
    if any(filters):
        return query(filter_(*filters)(*children))
    return query(*children)


@click.command("build", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--gte", default=None, help="Lower range bound on the timestamp field (e.g. now-1d)")
@click.option("--lte", default=None, help="Upper range bound on the timestamp field (e.g. now)")
@click.option("--term", "raw_terms", multiple=True, metavar="FIELD=VALUE", help="Exact-match filter (repeatable)")
@click.option("--sum", "raw_sums", multiple=True, metavar="NAME=FIELD", help="Named sum aggregation (repeatable)")
@click.option("--histogram", "histogram_field", default=None, metavar="FIELD", help="Date histogram over FIELD")
@click.option("--interval", "histogram_interval", default="1d", show_default=True, help="Histogram interval")
@click.option(
    "--style",
    type=click.Choice(STYLE_CHOICES, case_sensitive=False),
    default=None,
    help="Output style; defaults to [esquery] output",
)
@click.pass_context
def cli_build(
    ctx: click.Context,
    gte: str | None,
    lte: str | None,
    raw_terms: tuple[str, ...],
    raw_sums: tuple[str, ...],
    histogram_field: str | None,
    histogram_interval: str,
    style: str | None,
) -> None:
    """Print an aggregation query built from filters and aggregations.

    \b
    Example:
        esquery build --gte now-1d --lte now --term user=tj --sum total=bytes
    """
    if (gte is None) != (lte is None):
        raise click.UsageError("--gte and --lte must be given together")

    cli_ctx = get_cli_context(ctx)
    settings = get_query_settings(cli_ctx)
    terms = tuple(_split_pair(raw, option="--term") for raw in raw_terms)
    sums = tuple(_split_pair(raw, option="--sum") for raw in raw_sums)

    extra = {"command": "build", "filters": len(terms) + (gte is not None), "aggs": len(sums)}
    with lib_log_rich.runtime.bind(job_id="cli-build", extra=extra):
        logger.info("Building query document")
        document = build_document(
            settings,
            gte=gte,
            lte=lte,
            terms=terms,
            sums=sums,
            histogram_field=histogram_field,
            histogram_interval=histogram_interval,
        )
        echo_document(document, resolve_style(style, settings.output))


__all__ = ["build_document", "cli_build"]
