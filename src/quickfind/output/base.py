"""Common base for result formatters."""

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from quickfind.config.schema import OutputFormat
from quickfind.search.models import SearchResult

NO_RESULTS_MESSAGE = "No matching files found"


def results_header(count: int) -> str:
    """Summary line shown above a result list, e.g. ``Found 3 results``."""
    return f"Found {count} result{'' if count == 1 else 's'}"


class OutputFormatter(ABC):
    """Renders a ranked result list.

    Subclasses implement :meth:`format_results`; :meth:`print_results`
    writes that text to the formatter's stream (stdout by default).
    An empty list is a normal outcome and renders as
    :data:`NO_RESULTS_MESSAGE`, never as an error.
    """

    def __init__(self, stream: TextIO | None = None, verbose: bool = False) -> None:
        self._stream = stream or sys.stdout
        self._verbose = verbose

    @property
    def stream(self) -> TextIO:
        return self._stream

    @property
    def verbose(self) -> bool:
        """Include match scores in the output."""
        return self._verbose

    @property
    @abstractmethod
    def format_type(self) -> OutputFormat:
        """The format this formatter produces."""

    @abstractmethod
    def format_results(self, results: list[SearchResult]) -> str:
        """Render results, best first, as one string."""

    def print_results(self, results: list[SearchResult]) -> None:
        self._stream.write(self.format_results(results) + "\n")
