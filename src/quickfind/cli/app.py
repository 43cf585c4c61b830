"""quickfind command line application."""

import dataclasses
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from quickfind import __version__
from quickfind.cli.options import (
    FormatOption,
    LimitOption,
    NoIndexOption,
    QueryArgument,
    RootsOption,
    VerboseOption,
    resolve_format,
)
from quickfind.config import get_config
from quickfind.config.defaults import get_config_path
from quickfind.config.schema import OutputFormat, QuickFindConfig
from quickfind.exceptions import InvalidArgumentError, QuickFindError
from quickfind.output import get_formatter
from quickfind.search import SearchEngine, parse_query
from quickfind.search.models import ParsedQuery, SearchFilter
from quickfind.utils.files import expand_path
from quickfind.utils.logging import setup_from_config

app = typer.Typer(
    name="quickfind",
    help="Find files by name: fd when installed, a direct walk otherwise.",
    no_args_is_help=True,
)

# Results go to stdout; spinners, errors and logs to stderr
console = Console()
err_console = Console(stderr=True)

# The query language's -ext/-in/-size tokens must reach parse_query untouched
QUERY_CONTEXT = {"ignore_unknown_options": True}


def version_callback(value: bool) -> None:
    if value:
        console.print(f"quickfind version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Hybrid file search for command launchers."""


def _fail(error: QuickFindError) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {error}")
    return typer.Exit(error.exit_code)


def _add_roots(parsed: ParsedQuery, roots: list[str]) -> ParsedQuery:
    """Merge ``--in`` directories into the roots named by ``-in`` tokens."""
    if not roots:
        return parsed
    expanded = tuple(expand_path(root) for root in roots)
    for root, path in zip(roots, expanded):
        if not Path(path).is_dir():
            raise InvalidArgumentError(f"Not a directory: {root}")
    search_paths = (parsed.filter.search_paths or ()) + expanded
    return dataclasses.replace(
        parsed, filter=dataclasses.replace(parsed.filter, search_paths=search_paths)
    )


def _search_config(limit: int | None, no_index: bool) -> QuickFindConfig:
    """Copy of the loaded config with command-line overrides applied."""
    config = get_config().model_copy(deep=True)
    if limit is not None:
        config.search.max_results = limit
    if no_index:
        config.indexer.enabled = False
    return config


@app.command(context_settings=QUERY_CONTEXT)
def search(
    query: QueryArgument,
    roots: RootsOption = None,
    limit: LimitOption = None,
    no_index: NoIndexOption = False,
    format: FormatOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Search for files by name, with inline filters."""
    try:
        config = _search_config(limit, no_index)
        setup_from_config(config.logging, verbose=verbose, use_color=config.output.color)

        parsed = _add_roots(parse_query(" ".join(query)), roots or [])
        engine = SearchEngine(config)
        with err_console.status("Searching...", spinner="dots"):
            results = engine.search_parsed(parsed)
    except QuickFindError as e:
        raise _fail(e) from None

    output_format = resolve_format(format, config.output.default_format)
    options = {"color": config.output.color} if output_format is OutputFormat.RICH else {}
    get_formatter(output_format, verbose=verbose, **options).print_results(results)


@app.command(context_settings=QUERY_CONTEXT)
def parse(query: QueryArgument) -> None:
    """Show how a query splits into a search term and filters."""
    parsed = parse_query(" ".join(query))

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column(style="bold cyan")
    table.add_column()
    table.add_row("term", repr(parsed.term))
    table.add_row("broad match", str(parsed.is_broad and not parsed.filter.is_empty))

    for field in dataclasses.fields(SearchFilter):
        value = getattr(parsed.filter, field.name)
        if value is None:
            continue
        if isinstance(value, (frozenset, tuple)):
            value = ", ".join(sorted(value) if isinstance(value, frozenset) else value)
        table.add_row(field.name, str(value))

    console.print(table)


@app.command("config")
def config_cmd(
    show_path: bool = typer.Option(False, "--path", "-p", help="Only print the file path."),
) -> None:
    """Show the effective configuration."""
    if show_path:
        console.print(str(get_config_path()), soft_wrap=True)
        return

    try:
        config = get_config()
    except QuickFindError as e:
        raise _fail(e) from None

    table = Table(title=str(get_config_path()), show_header=False, title_justify="left")
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Result cap", str(config.search.max_results))
    table.add_row("Max depth", str(config.search.max_depth))
    table.add_row("Walk budget", f"{config.search.walk_budget_seconds}s")
    table.add_row("Indexer enabled", str(config.indexer.enabled))
    table.add_row("Indexer timeout", f"{config.indexer.timeout_seconds}s")
    table.add_row("Output format", str(OutputFormat(config.output.default_format).value))
    console.print(table)


@app.command()
def indexer() -> None:
    """Show which fd binary the fast path uses."""
    try:
        engine = SearchEngine(get_config())
    except QuickFindError as e:
        raise _fail(e) from None

    path = engine.indexer_path
    if path is None:
        console.print("[yellow]fd not found[/yellow]: searches use the deep walk only")
    else:
        console.print(path, soft_wrap=True)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
