"""Normalize a query document read from a file or stdin.

Contents:
    * :func:`cli_normalize` - Canonicalize JSON as compact or indented text.
"""

from __future__ import annotations

import logging
from typing import BinaryIO

import lib_log_rich.runtime
import rich_click as click

from esquery.domain.errors import MalformedDocumentError

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context, get_query_settings
from ..exit_codes import ExitCode
from ._output import STYLE_CHOICES, echo_document, resolve_style

logger = logging.getLogger(__name__)


@click.command("normalize", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("source", type=click.File("rb"), default="-")
@click.option(
    "--style",
    type=click.Choice(STYLE_CHOICES, case_sensitive=False),
    default=None,
    help="Output style; defaults to [esquery] output",
)
@click.pass_context
def cli_normalize(ctx: click.Context, source: BinaryIO, style: str | None) -> None:
    """Re-emit the JSON document in SOURCE (default: stdin) in canonical form.

    Keys are sorted; duplicate keys keep their last value. Input that is not
    valid UTF-8 JSON exits with code 22.
    """
    cli_ctx = get_cli_context(ctx)
    settings = get_query_settings(cli_ctx)
    effective_style = resolve_style(style, settings.output)
    raw = source.read()

    extra = {"command": "normalize", "style": effective_style.value}
    with lib_log_rich.runtime.bind(job_id="cli-normalize", extra=extra):
        logger.info("Normalizing document", extra={"bytes": len(raw)})
        try:
            echo_document(raw, effective_style)
        except MalformedDocumentError as exc:
            logger.warning("Document is not valid JSON", extra={"error": str(exc)})
            click.echo(f"Error: {exc}", err=True)
            raise SystemExit(ExitCode.INVALID_ARGUMENT) from exc


__all__ = ["cli_normalize"]
