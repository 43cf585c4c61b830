"""File search for quickfind.

This package provides the hybrid search engine: query filter parsing,
fuzzy name scoring, an fd fast path and a deep directory walk fallback.
"""

from quickfind.search.engine import SearchEngine
from quickfind.search.fuzzy import fuzzy_score, requires_literal_match, tokenize
from quickfind.search.models import (
    FileType,
    ParsedQuery,
    SearchFilter,
    SearchResult,
    sort_results,
)
from quickfind.search.probe import FastIndexProbe
from quickfind.search.query import parse_days, parse_query, parse_size
from quickfind.search.walker import DeepTreeWalker

__all__ = [
    # Engine
    "SearchEngine",
    "FastIndexProbe",
    "DeepTreeWalker",
    # Models
    "FileType",
    "ParsedQuery",
    "SearchFilter",
    "SearchResult",
    "sort_results",
    # Query language
    "parse_query",
    "parse_size",
    "parse_days",
    # Scoring
    "fuzzy_score",
    "requires_literal_match",
    "tokenize",
]
