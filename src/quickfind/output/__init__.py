"""Renderers for search results: a rich table, plain text, or JSON."""

from typing import Any

from quickfind.config.schema import OutputFormat
from quickfind.output.base import NO_RESULTS_MESSAGE, OutputFormatter, results_header
from quickfind.output.json_fmt import JSONFormatter
from quickfind.output.plain import PlainFormatter
from quickfind.output.rich_fmt import RichFormatter

FORMATTERS: dict[OutputFormat, type[OutputFormatter]] = {
    OutputFormat.RICH: RichFormatter,
    OutputFormat.PLAIN: PlainFormatter,
    OutputFormat.JSON: JSONFormatter,
}


def get_formatter(
    format_type: OutputFormat | str,
    verbose: bool = False,
    **options: Any,
) -> OutputFormatter:
    """Create the formatter for ``format_type`` (case-insensitive name or enum).

    Extra keyword options go to the formatter's constructor, e.g. ``width``
    and ``color`` for the rich table.

    Raises:
        ValueError: If the format name is unknown.
    """
    name = format_type.value if isinstance(format_type, OutputFormat) else format_type
    try:
        output_format = OutputFormat(name.lower())
    except ValueError:
        raise ValueError(f"Unknown output format: {format_type!r}") from None
    return FORMATTERS[output_format](verbose=verbose, **options)


__all__ = [
    "FORMATTERS",
    "NO_RESULTS_MESSAGE",
    "JSONFormatter",
    "OutputFormat",
    "OutputFormatter",
    "PlainFormatter",
    "RichFormatter",
    "get_formatter",
    "results_header",
]
