"""quickfind command line (Typer + Rich).

    quickfind search invoice -ext pdf -time 2w
    quickfind parse 最近 pdf
"""

from quickfind.cli.app import app, main

__all__ = ["app", "main"]
