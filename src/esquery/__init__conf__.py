"""Static package metadata surfaced to the CLI and configuration layers.

Values mirror ``pyproject.toml``; the version line is kept in sync at release
time.
"""

from __future__ import annotations

name = "esquery"
title = "Composable builder for aggregation query documents"
version = "0.1.0"
homepage = "https://github.com/bitranox/esquery"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "esquery"

#: Identifiers used by lib_layered_config to locate configuration files.
LAYEREDCONF_VENDOR = "bitranox"
LAYEREDCONF_APP = "esquery"
LAYEREDCONF_SLUG = "esquery"


def print_info() -> None:
    """Print the summarised metadata block used by the CLI ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for esquery:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
