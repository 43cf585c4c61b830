"""Fast path: query the external ``fd`` file finder.

``fd`` walks the tree natively and honours ignore files, so when it is
installed it answers most queries far faster than the Python walk. Any
failure (binary missing, non-zero exit, timeout) yields an empty list and
lets the caller fall back to the deep walk.
"""

import os
import shutil
import subprocess
from collections.abc import Sequence
from datetime import datetime, timedelta
from functools import cached_property

from quickfind.config.defaults import FD_CANDIDATE_PATHS
from quickfind.exceptions import (
    IndexerFailedError,
    IndexerNotFoundError,
    IndexerTimeoutError,
    SearchError,
)
from quickfind.search.entries import result_from_stat
from quickfind.search.fuzzy import fuzzy_score
from quickfind.search.models import FileType, SearchFilter, SearchResult, sort_results
from quickfind.utils.files import expand_path
from quickfind.utils.logging import get_logger

logger = get_logger(__name__)

BROAD_PATTERN = ".*"

_FD_SIZE_UNITS: tuple[tuple[str, int], ...] = (
    ("gi", 1024**3),
    ("mi", 1024**2),
    ("ki", 1024),
)


def format_size_for_fd(size_bytes: int) -> str:
    """Render a byte count in fd's ``--size`` syntax.

    Uses the largest binary unit that represents the value exactly, so the
    bound fd applies is the bound that was asked for.
    """
    for unit, multiplier in _FD_SIZE_UNITS:
        if size_bytes >= multiplier and size_bytes % multiplier == 0:
            return f"{size_bytes // multiplier}{unit}"
    return f"{size_bytes}b"


def resolve_fd_executable(candidate_paths: Sequence[str] = FD_CANDIDATE_PATHS) -> str | None:
    """Locate an fd binary.

    Well-known install locations are checked first (GUI launchers often run
    with a minimal PATH), then ``fd`` and Debian's ``fdfind`` on PATH.
    """
    for candidate in candidate_paths:
        path = os.path.expanduser(candidate)
        if os.path.isfile(path) and os.access(path, os.X_OK):
            return path
    return shutil.which("fd") or shutil.which("fdfind")


class FastIndexProbe:
    """Run one fd query and turn its output into scored results."""

    def __init__(
        self,
        executable: str | os.PathLike[str] | None = None,
        *,
        enabled: bool = True,
        candidate_paths: Sequence[str] = FD_CANDIDATE_PATHS,
        timeout: float = 5.0,
        max_lines: int = 50,
        max_results: int = 20,
        score_floor: float = 0.5,
    ) -> None:
        """Initialize the probe.

        Args:
            executable: Explicit fd path; skips discovery when given.
            enabled: When False the probe never runs and returns nothing.
            candidate_paths: Install locations checked before PATH.
            timeout: Hard wall-clock limit for the fd process, in seconds.
            max_lines: Output lines parsed; the rest is ignored.
            max_results: Maximum results returned.
            score_floor: Lowest score given to an fd hit in ranked mode.
        """
        self.executable = os.fspath(executable) if executable else None
        self.enabled = enabled
        self.candidate_paths = tuple(candidate_paths)
        self.timeout = timeout
        self.max_lines = max_lines
        self.max_results = max_results
        self.score_floor = score_floor

    @cached_property
    def executable_path(self) -> str | None:
        """Resolved fd binary, computed once per probe."""
        if not self.enabled:
            return None
        if self.executable:
            return self.executable
        path = resolve_fd_executable(self.candidate_paths)
        logger.debug("fd executable resolved to %s", path)
        return path

    @property
    def available(self) -> bool:
        return self.executable_path is not None

    def build_command(
        self,
        term: str,
        search_filter: SearchFilter,
        broad_match: bool = False,
        now: datetime | None = None,
    ) -> list[str]:
        """Build the fd argument vector for a query.

        Raises:
            IndexerNotFoundError: If no fd binary is available.
        """
        executable = self.executable_path
        if executable is None:
            raise IndexerNotFoundError()

        now = now or datetime.now()
        args = [executable, "--color=never"]

        if search_filter.is_directory is True:
            args += ["--type", "d"]
        elif search_filter.is_directory is False:
            args += ["--type", "f"]

        for ext in sorted(search_filter.extensions or ()):
            args += ["--extension", ext]

        if search_filter.min_size is not None:
            args += ["--size", f"+{format_size_for_fd(search_filter.min_size)}"]
        if search_filter.max_size is not None:
            args += ["--size", f"-{format_size_for_fd(search_filter.max_size)}"]

        if search_filter.modified_after is not None:
            seconds = int((now - search_filter.modified_after).total_seconds())
            if seconds > 0:
                # One second of slack; exact bounds are re-checked on parse
                args += ["--changed-within", f"{seconds + 1}s"]
        if search_filter.modified_before is not None:
            before = search_filter.modified_before + timedelta(seconds=1)
            args += ["--changed-before", before.strftime("%Y-%m-%d %H:%M:%S")]

        if not broad_match:
            args.append("--fixed-strings")
        # The walker and scorer ignore case; fd would otherwise use smart case
        args += ["--ignore-case", "--absolute-path"]

        args.append("--")
        args.append(BROAD_PATTERN if broad_match else term)
        args.extend(expand_path(root) for root in search_filter.roots())
        return args

    def probe(
        self,
        term: str,
        search_filter: SearchFilter,
        broad_match: bool = False,
    ) -> list[SearchResult]:
        """Search with fd.

        Returns:
            Results sorted by recency (broad match) or score, capped at
            ``max_results``. Empty when fd is unavailable or fails.
        """
        try:
            command = self.build_command(term, search_filter, broad_match)
            output = self._run(command)
        except SearchError as e:
            logger.debug("fast path unavailable: %s", e)
            return []

        results = self._parse_output(output, term, search_filter, broad_match)
        logger.debug("fast path returned %d results", len(results))
        return sort_results(results, broad_match)[: self.max_results]

    def _run(self, command: list[str]) -> bytes:
        """Run fd and return its stdout.

        Raises:
            IndexerTimeoutError: If fd outlives the timeout (it is killed).
            IndexerFailedError: If fd cannot start or exits non-zero.
        """
        try:
            completed = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                stdin=subprocess.DEVNULL,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise IndexerTimeoutError(self.timeout) from e
        except OSError as e:
            raise IndexerFailedError(f"Cannot run {command[0]}: {e}") from e

        if completed.returncode != 0:
            raise IndexerFailedError(
                f"fd exited with status {completed.returncode}",
                returncode=completed.returncode,
            )
        return completed.stdout or b""

    def _parse_output(
        self,
        output: bytes,
        term: str,
        search_filter: SearchFilter,
        broad_match: bool,
    ) -> list[SearchResult]:
        query = term.lower()
        results: list[SearchResult] = []

        lines = [line for line in output.splitlines() if line.strip()]
        for raw_line in lines[: self.max_lines]:
            path = os.fsdecode(raw_line).rstrip(os.sep) or os.sep
            name = os.path.basename(path)
            try:
                st = os.lstat(path)
            except OSError:
                continue

            if broad_match:
                score = self.score_floor
            else:
                score = max(fuzzy_score(query, name.lower()), self.score_floor)

            result = result_from_stat(path, name, st, score)
            if not search_filter.matches(
                result.size,
                result.modified_date,
                result.extension,
                result.file_type is FileType.DIRECTORY,
            ):
                continue
            results.append(result)

        return results
