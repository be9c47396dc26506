"""Printing of finished documents, shared by ``build`` and ``normalize``."""

from __future__ import annotations

import rich_click as click

from esquery.domain.dsl import compress, pretty
from esquery.domain.enums import OutputStyle

#: Choices offered by ``--style``; ``None`` defers to ``[esquery] output``.
STYLE_CHOICES = [style.value for style in OutputStyle]


def resolve_style(requested: str | None, configured: OutputStyle) -> OutputStyle:
    """Prefer the ``--style`` option over the configured output style.

    Example:
        >>> resolve_style(None, OutputStyle.PRETTY)
        <OutputStyle.PRETTY: 'pretty'>
        >>> resolve_style("COMPACT", OutputStyle.PRETTY)
        <OutputStyle.COMPACT: 'compact'>
    """
    if requested is None:
        return configured
    return OutputStyle(requested.lower())


def echo_document(document: str | bytes, style: OutputStyle) -> None:
    """Normalize *document* in *style* and write it to stdout.

    Raises:
        MalformedDocumentError: If *document* is not valid JSON.
    """
    rendered = pretty(document) if style is OutputStyle.PRETTY else compress(document)
    click.echo(rendered)


__all__ = ["STYLE_CHOICES", "echo_document", "resolve_style"]
