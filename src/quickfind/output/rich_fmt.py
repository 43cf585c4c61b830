"""Rich terminal result formatter."""

from io import StringIO
from typing import TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from quickfind.config.schema import OutputFormat
from quickfind.output.base import NO_RESULTS_MESSAGE, OutputFormatter, results_header
from quickfind.search.models import SearchResult


class RichFormatter(OutputFormatter):
    """Tabular terminal output using the Rich library."""

    def __init__(
        self,
        stream: TextIO | None = None,
        verbose: bool = False,
        width: int | None = None,
        color: bool = True,
    ) -> None:
        """Initialize rich formatter.

        Args:
            stream: Output stream.
            verbose: Add a match score column.
            width: Console width (None for auto-detect).
            color: Emit ANSI styles when printing.
        """
        super().__init__(stream, verbose)
        self._width = width
        self._color = color
        self._console: Console | None = None

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.RICH

    def _get_console(self) -> Console:
        if self._console is None:
            self._console = Console(
                file=self._stream,
                width=self._width,
                no_color=not self._color,
                highlight=False,
            )
        return self._console

    def build_table(self, results: list[SearchResult]) -> Table:
        """Build the result table renderable."""
        table = Table(title=results_header(len(results)), title_justify="left")
        table.add_column("", no_wrap=True)
        table.add_column("Name", style="bold cyan")
        table.add_column("Size", justify="right")
        table.add_column("Modified", style="dim")
        if self._verbose:
            table.add_column("Score", justify="right")
        table.add_column("Path", style="dim", overflow="fold")

        for result in results:
            row = [
                result.icon,
                result.name,
                result.size_string,
                result.modified_date.strftime("%Y-%m-%d %H:%M"),
            ]
            if self._verbose:
                row.append(f"{result.match_score:.2f}")
            row.append(result.path)
            table.add_row(*row)
        return table

    def format_results(self, results: list[SearchResult]) -> str:
        string_io = StringIO()
        temp_console = Console(file=string_io, width=self._width, force_terminal=False)
        if not results:
            temp_console.print(Text(NO_RESULTS_MESSAGE, style="dim"))
        else:
            temp_console.print(self.build_table(results))
        return string_io.getvalue().rstrip()

    def print_results(self, results: list[SearchResult]) -> None:
        console = self._get_console()
        if not results:
            console.print(f"[dim]{NO_RESULTS_MESSAGE}[/dim]")
            return
        console.print(self.build_table(results))
