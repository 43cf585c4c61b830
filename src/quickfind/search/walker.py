"""Deep walk: recursive directory traversal used when fd finds nothing.

The walk never follows symlinks and never crosses onto another device.
Hidden and well-known noise directories are pruned, depth is capped, and
the query and filter are applied while walking so a root stops as soon as
it has produced enough results.
"""

import os
import threading
import time
from collections.abc import Collection

from quickfind.search.entries import result_from_stat
from quickfind.search.fuzzy import fuzzy_score, requires_literal_match
from quickfind.search.models import SearchFilter, SearchResult, sort_results
from quickfind.utils.files import expand_path, file_extension, should_prune_dir
from quickfind.utils.logging import get_logger

logger = get_logger(__name__)

LITERAL_EXACT_SCORE = 1.0
LITERAL_SUBSTRING_SCORE = 0.96
BROAD_MATCH_SCORE = 0.5


class DeepTreeWalker:
    """Walk one search root and collect matching entries."""

    def __init__(
        self,
        max_depth: int = 8,
        max_results: int = 20,
        min_score: float = 0.1,
        budget_seconds: float | None = None,
    ) -> None:
        """Initialize the walker.

        Args:
            max_depth: Deepest directory level descended into (root is 0).
            max_results: Results collected per root before stopping.
            min_score: Fuzzy scores at or below this are discarded.
            budget_seconds: Wall-clock limit per root (None for no limit).
        """
        self.max_depth = max_depth
        self.max_results = max_results
        self.min_score = min_score
        self.budget_seconds = budget_seconds

    def score_name(self, query: str, name: str, broad_match: bool) -> float | None:
        """Score an entry name, or None if it does not match.

        Args:
            query: Lowercased search term.
            name: Entry basename.
            broad_match: Accept every name with a placeholder score.
        """
        if broad_match:
            return BROAD_MATCH_SCORE

        name_lower = name.lower()
        if requires_literal_match(query):
            if query not in name_lower:
                return None
            return LITERAL_EXACT_SCORE if name_lower == query else LITERAL_SUBSTRING_SCORE

        score = fuzzy_score(query, name_lower)
        if score <= self.min_score:
            return None
        return score

    def walk(
        self,
        root_path: str,
        term: str,
        search_filter: SearchFilter,
        excluding: Collection[str] = frozenset(),
        broad_match: bool = False,
        cancel: threading.Event | None = None,
    ) -> list[SearchResult]:
        """Walk ``root_path`` and return matching entries.

        Entries of a directory are examined before any of its
        subdirectories, in name order, so shallow matches win when the
        per-root cap is reached.

        Args:
            root_path: Directory to search (``~`` is expanded).
            term: Search term; ignored in broad-match mode.
            search_filter: Constraints every result must satisfy.
            excluding: Paths already reported by another strategy.
            broad_match: Accept any name that passes the filter.
            cancel: Set by the caller to stop the walk early.

        Returns:
            Results sorted by recency (broad match) or score.
        """
        root = expand_path(root_path)
        try:
            root_stat = os.stat(root)
        except OSError as e:
            logger.debug("cannot stat search root %s: %s", root, e)
            return []
        if not os.path.isdir(root):
            return []

        query = term.strip().lower()
        device = root_stat.st_dev
        deadline = (
            time.monotonic() + self.budget_seconds if self.budget_seconds else None
        )
        results: list[SearchResult] = []
        pending: list[tuple[str, int]] = [(root, 0)]

        while pending:
            directory, depth = pending.pop()
            try:
                with os.scandir(directory) as iterator:
                    entries = sorted(iterator, key=lambda entry: entry.name)
            except OSError as e:
                logger.debug("skipping unreadable directory %s: %s", directory, e)
                continue

            level = depth + 1
            subdirectories: list[tuple[str, int]] = []

            for entry in entries:
                if len(results) >= self.max_results:
                    return sort_results(results, broad_match)
                if cancel is not None and cancel.is_set():
                    logger.debug("walk of %s cancelled", root)
                    return sort_results(results, broad_match)
                if deadline is not None and time.monotonic() > deadline:
                    logger.debug("walk of %s exceeded %.1fs budget", root, self.budget_seconds)
                    return sort_results(results, broad_match)

                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                    is_file = not is_dir and entry.is_file(follow_symlinks=False)
                except OSError:
                    continue
                if not (is_dir or is_file):
                    continue
                if is_dir and (should_prune_dir(entry.name) or level > self.max_depth):
                    continue

                try:
                    st = entry.stat(follow_symlinks=False)
                except OSError:
                    continue

                if is_dir and st.st_dev == device:
                    subdirectories.append((entry.path, level))

                if entry.path in excluding:
                    continue

                score = self.score_name(query, entry.name, broad_match)
                if score is None:
                    continue

                result = result_from_stat(entry.path, entry.name, st, score)
                if not search_filter.matches(
                    result.size,
                    result.modified_date,
                    file_extension(entry.name),
                    is_dir,
                ):
                    continue
                results.append(result)

            # Reversed so the stack pops subdirectories in name order
            pending.extend(reversed(subdirectories))

        return sort_results(results, broad_match)
