"""Reusable Typer parameter declarations for quickfind commands.

Only long option names are declared for search: the query language uses
single-dash tokens (``-in``, ``-ext``, ``-dir``) that click would otherwise
read as clusters of short options.
"""

from typing import Annotated

import typer

from quickfind.config.schema import OutputFormat

QueryArgument = Annotated[
    list[str],
    typer.Argument(
        help="Search words and filters, e.g. 'report -ext pdf -time 1w' or '最近 pdf'.",
        show_default=False,
    ),
]

RootsOption = Annotated[
    list[str] | None,
    typer.Option("--in", help="Directory to search (repeatable). Defaults to home."),
]

LimitOption = Annotated[
    int | None,
    typer.Option("--limit", min=1, help="Maximum number of results."),
]

NoIndexOption = Annotated[
    bool,
    typer.Option("--no-index", help="Skip the fd fast path and walk directly."),
]

FormatOption = Annotated[
    OutputFormat | None,
    typer.Option(
        "--format",
        "-f",
        case_sensitive=False,
        help="rich, plain or json. Defaults to [output] default_format.",
    ),
]

VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show match scores and debug logs."),
]


def resolve_format(chosen: OutputFormat | None, configured: str) -> OutputFormat:
    """Pick the command-line format if given, else the configured one."""
    return chosen if chosen is not None else OutputFormat(configured)
