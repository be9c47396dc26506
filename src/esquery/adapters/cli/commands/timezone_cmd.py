"""Show how a time-zone argument resolves.

Contents:
    * :func:`cli_timezone` - Print the ``time_zone`` fragment for a name or offset.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from esquery.domain.dsl import time_zone

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context, get_query_settings

logger = logging.getLogger(__name__)


@click.command("timezone", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("name", required=False, default=None)
@click.pass_context
def cli_timezone(ctx: click.Context, name: str | None) -> None:
    """Print the time_zone fragment for NAME.

    NAME may be a region such as Europe/Vienna or a literal offset such as
    -08:00. Names missing from the time-zone database are printed unchanged.
    Without NAME the configured [esquery] time_zone is used, then the local
    offset.
    """
    cli_ctx = get_cli_context(ctx)
    effective = name if name is not None else get_query_settings(cli_ctx).time_zone

    with lib_log_rich.runtime.bind(job_id="cli-timezone", extra={"command": "timezone", "time_zone": effective}):
        logger.info("Resolving time zone")
        click.echo(time_zone(effective))


__all__ = ["cli_timezone"]
