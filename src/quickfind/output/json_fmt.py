"""JSON result formatter, for scripts and launcher front ends."""

import json
from typing import Any, TextIO

from quickfind.config.schema import OutputFormat
from quickfind.output.base import OutputFormatter
from quickfind.search.models import SearchResult


class JSONFormatter(OutputFormatter):
    """One JSON document: ``{"success", "count", "results": [...]}``.

    Every result field is always present, so ``verbose`` has no effect.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        verbose: bool = False,
        indent: int | None = 2,
        ensure_ascii: bool = False,
    ) -> None:
        super().__init__(stream, verbose)
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.JSON

    @staticmethod
    def build_payload(results: list[SearchResult]) -> dict[str, Any]:
        return {
            "success": True,
            "count": len(results),
            "results": [result.to_dict() for result in results],
        }

    def format_results(self, results: list[SearchResult]) -> str:
        return json.dumps(
            self.build_payload(results),
            indent=self.indent,
            ensure_ascii=self.ensure_ascii,
        )
