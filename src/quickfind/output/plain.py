"""Plain text result formatter."""

from quickfind.config.schema import OutputFormat
from quickfind.output.base import NO_RESULTS_MESSAGE, OutputFormatter, results_header
from quickfind.search.models import SearchResult


class PlainFormatter(OutputFormatter):
    """Plain text output suitable for piping or basic terminals."""

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.PLAIN

    def format_results(self, results: list[SearchResult]) -> str:
        if not results:
            return NO_RESULTS_MESSAGE

        blocks: list[str] = []
        for result in results:
            line = f"{result.icon} {result.name}  {result.size_string}"
            if self._verbose:
                line += f"  [{result.match_score:.2f}]"
            blocks.append(f"{line}\n   {result.path}")

        return results_header(len(results)) + "\n\n" + "\n\n".join(blocks)
