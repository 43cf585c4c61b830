"""Pydantic models for quickfind configuration.

Each model maps to one table of ``config.toml``. Limits for the fast path
live under ``[indexer]``; limits shared by both strategies under ``[search]``.
"""

import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class OutputFormat(str, Enum):
    """How search results are printed."""

    RICH = "rich"
    PLAIN = "plain"
    JSON = "json"


class SearchConfig(BaseModel):
    """Result cap, walk depth and score thresholds."""

    max_results: int = Field(default=20, ge=1)
    max_depth: int = Field(default=8, ge=0)
    min_fuzzy_score: float = Field(default=0.1, ge=0.0, le=1.0)
    fast_score_floor: float = Field(default=0.5, ge=0.0, le=1.0)
    walk_budget_seconds: float | None = Field(default=10.0, gt=0)  # None: unbounded
    max_workers: int = Field(default=8, ge=1)


class IndexerConfig(BaseModel):
    """The fd fast path."""

    enabled: bool = True
    executable: Path | None = None  # Discover fd / fdfind when unset
    timeout_seconds: float = Field(default=5.0, gt=0)
    max_lines: int = Field(default=50, ge=1)

    @field_validator("executable")
    @classmethod
    def _expand_executable(cls, value: Path | None) -> Path | None:
        return value.expanduser() if value is not None else None


class OutputConfig(BaseModel):
    default_format: OutputFormat = OutputFormat.RICH
    color: bool = True


class LoggingConfig(BaseModel):
    """Log level and destinations; stderr always gets a handler."""

    level: str = "WARNING"
    file: Path | None = None
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        name = value.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"unknown log level {value!r}")
        return name

    @field_validator("file")
    @classmethod
    def _expand_file(cls, value: Path | None) -> Path | None:
        return value.expanduser() if value is not None else None


class QuickFindConfig(BaseModel):
    """Root of ``config.toml``."""

    search: SearchConfig = Field(default_factory=SearchConfig)
    indexer: IndexerConfig = Field(default_factory=IndexerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        """Pydantic config."""

        use_enum_values = True
