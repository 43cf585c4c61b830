"""Hybrid search engine.

This module ties the strategies together: an fd fast path that is
authoritative whenever it finds anything, and a concurrent deep walk over
every search root when it does not. The engine never raises; every
failure degrades to fewer (or zero) results.
"""

import logging
import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait

from quickfind.config.schema import QuickFindConfig
from quickfind.search.models import ParsedQuery, SearchFilter, SearchResult, sort_results
from quickfind.search.probe import FastIndexProbe
from quickfind.search.query import parse_query
from quickfind.search.walker import DeepTreeWalker
from quickfind.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)


class SearchEngine:
    """File search over the fd fast path with a deep-walk fallback.

    Create one engine per process and share it; the resolved fd path is
    cached on the engine's probe.
    """

    def __init__(
        self,
        config: QuickFindConfig | None = None,
        probe: FastIndexProbe | None = None,
        walker: DeepTreeWalker | None = None,
    ) -> None:
        """Initialize the search engine.

        Args:
            config: Configuration; defaults are used when None.
            probe: Fast-path probe (built from config when None).
            walker: Deep-walk strategy (built from config when None).
        """
        self.config = config or QuickFindConfig()
        search = self.config.search
        indexer = self.config.indexer

        self.max_results = search.max_results
        self.max_workers = search.max_workers

        self.probe = probe or FastIndexProbe(
            indexer.executable,
            enabled=indexer.enabled,
            timeout=indexer.timeout_seconds,
            max_lines=indexer.max_lines,
            max_results=search.max_results,
            score_floor=search.fast_score_floor,
        )
        self.walker = walker or DeepTreeWalker(
            max_depth=search.max_depth,
            max_results=search.max_results,
            min_score=search.min_fuzzy_score,
            budget_seconds=search.walk_budget_seconds,
        )

    @property
    def indexer_path(self) -> str | None:
        """The fd binary used for the fast path, if any."""
        return self.probe.executable_path

    def search(
        self,
        query: str,
        search_filter: SearchFilter | None = None,
        allow_broad_match: bool = False,
    ) -> list[SearchResult]:
        """Search for files matching a term and filter.

        Args:
            query: Search term. May be empty only with ``allow_broad_match``.
            search_filter: Constraints on results (unconstrained when None).
            allow_broad_match: Let an empty term list every entry that
                passes the filter, newest first.

        Returns:
            At most ``max_results`` results; empty when nothing matched.
        """
        search_filter = search_filter or SearchFilter()
        term = query.strip()
        broad_match = allow_broad_match and not term
        if not term and not broad_match:
            return []

        fast_results = self.probe.probe(term, search_filter, broad_match)
        if fast_results:
            log_with_context(
                logger,
                logging.DEBUG,
                "fast path hit",
                term=term,
                results=len(fast_results),
            )
            return sort_results(fast_results, broad_match)[: self.max_results]

        logger.debug("fast path empty for %r, falling back to deep walk", term)
        deep_results = self._deep_search(
            term,
            search_filter,
            excluding=frozenset(result.path for result in fast_results),
            broad_match=broad_match,
        )
        return sort_results(deep_results, broad_match)[: self.max_results]

    def search_parsed(self, parsed: ParsedQuery) -> list[SearchResult]:
        """Search with an already parsed query.

        Broad match is allowed only when the filter constrains something,
        so an empty query never lists a whole home directory.
        """
        allow_broad = parsed.is_broad and not parsed.filter.is_empty
        return self.search(parsed.term, parsed.filter, allow_broad_match=allow_broad)

    def search_text(self, raw_query: str) -> list[SearchResult]:
        """Parse raw query text with the filter language and search it."""
        return self.search_parsed(parse_query(raw_query))

    def _deep_search(
        self,
        term: str,
        search_filter: SearchFilter,
        excluding: frozenset[str],
        broad_match: bool,
    ) -> list[SearchResult]:
        """Walk every root concurrently and merge the results.

        Stops waiting once twice the result cap has been collected and
        signals the remaining walkers to stop.
        """
        roots = list(dict.fromkeys(search_filter.roots()))
        cancel = threading.Event()
        collected: dict[str, SearchResult] = {}
        enough = self.max_results * 2

        executor = ThreadPoolExecutor(
            max_workers=min(self.max_workers, len(roots)),
            thread_name_prefix="quickfind-walk",
        )
        try:
            futures: dict[Future[list[SearchResult]], str] = {
                executor.submit(
                    self.walker.walk,
                    root,
                    term,
                    search_filter,
                    excluding,
                    broad_match,
                    cancel,
                ): root
                for root in roots
            }
            pending = set(futures)
            while pending and len(collected) < enough:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    root = futures[future]
                    try:
                        batch = future.result()
                    except Exception:
                        logger.warning("deep walk of %s failed", root, exc_info=True)
                        continue
                    logger.debug("deep walk of %s produced %d results", root, len(batch))
                    for result in batch:
                        collected.setdefault(result.path, result)
        finally:
            cancel.set()
            executor.shutdown(wait=False, cancel_futures=True)

        return list(collected.values())
