"""Exception hierarchy for quickfind.

Every error carries a process exit code and a short message fit for the
terminal. Search errors never reach the CLI: the engine treats any fast
path failure as "no fast results" and walks instead.
"""

from pathlib import Path


class QuickFindError(Exception):
    """Base exception for all quickfind errors."""

    exit_code: int = 1
    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Configuration (20-29)
class ConfigError(QuickFindError):
    """The config file could not be read or parsed."""

    exit_code = 20
    user_message = "Configuration error"

    def __init__(
        self, message: str | None = None, *, path: Path | None = None
    ) -> None:
        super().__init__(message)
        self.path = path


class ConfigNotFoundError(ConfigError):
    exit_code = 21
    user_message = "Configuration file not found"


class ConfigValidationError(ConfigError):
    """The config file parsed but holds invalid values."""

    exit_code = 22
    user_message = "Invalid configuration"


# Fast-path indexer (30-39)
class SearchError(QuickFindError):
    exit_code = 30
    user_message = "Search error"


class IndexerNotFoundError(SearchError):
    """No fd binary in the known install locations or on PATH."""

    exit_code = 31
    user_message = "No fd executable found. Install fd or set QUICKFIND_FD_PATH."


class IndexerTimeoutError(SearchError):
    """fd ran past its time limit and was killed."""

    exit_code = 32
    user_message = "File indexer timed out"

    def __init__(self, timeout: float) -> None:
        super().__init__(f"fd exceeded {timeout}s")
        self.timeout = timeout


class IndexerFailedError(SearchError):
    """fd could not be started or exited with a non-zero status."""

    exit_code = 33
    user_message = "File indexer failed"

    def __init__(
        self, message: str | None = None, *, returncode: int | None = None
    ) -> None:
        super().__init__(message)
        self.returncode = returncode


# Command line (40-49)
class CommandError(QuickFindError):
    exit_code = 40
    user_message = "Command error"


class InvalidArgumentError(CommandError):
    """A command-line value was rejected, such as a missing ``--in`` directory."""

    exit_code = 42
    user_message = "Invalid argument"
