"""Pytest fixtures for quickfind tests."""

import logging
import os
import tempfile
from collections.abc import Callable, Generator
from datetime import datetime
from pathlib import Path

import pytest

from quickfind.config import reset_config
from quickfind.config.schema import IndexerConfig, QuickFindConfig
from quickfind.search import SearchEngine


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory(prefix="quickfind-test-") as tmpdir:
        yield Path(tmpdir).resolve()


def touch(path: Path, content: bytes = b"x", mtime: datetime | None = None) -> Path:
    """Create a file (and its parents), optionally with a fixed mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    if mtime is not None:
        ts = mtime.timestamp()
        os.utime(path, (ts, ts))
    return path


@pytest.fixture
def make_file() -> Callable[..., Path]:
    """Factory that creates files with optional content and mtime."""
    return touch


@pytest.fixture
def sample_tree(temp_dir: Path) -> Path:
    """Create a small tree with noise directories and nested files."""
    touch(temp_dir / "notes.md", b"# notes\n")
    touch(temp_dir / "plain.txt", b"hello\n")
    touch(temp_dir / "budget_report_2024.xlsx", b"x" * 2048)
    touch(temp_dir / "docs" / "meeting-notes.md", b"# meeting\n")
    touch(temp_dir / "docs" / "archive" / "old_notes.txt", b"old\n")
    touch(temp_dir / "src" / "SearchEngine.swift", b"// swift\n")
    touch(temp_dir / ".git" / "notes.md", b"hidden\n")
    touch(temp_dir / "node_modules" / "notes.md", b"noise\n")
    touch(temp_dir / ".hidden_dir" / "notes.md", b"hidden\n")
    return temp_dir


@pytest.fixture
def default_config() -> QuickFindConfig:
    """Get default configuration."""
    return QuickFindConfig()


@pytest.fixture
def walk_only_config() -> QuickFindConfig:
    """Configuration with the fd fast path switched off."""
    return QuickFindConfig(indexer=IndexerConfig(enabled=False))


@pytest.fixture
def engine(walk_only_config: QuickFindConfig) -> SearchEngine:
    """Search engine that only uses the deep walk."""
    return SearchEngine(walk_only_config)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Reset config, env vars and CLI logging handlers between tests."""
    for name in list(os.environ):
        if name.startswith("QUICKFIND_"):
            monkeypatch.delenv(name)
    reset_config()
    yield
    reset_config()
    package_logger = logging.getLogger("quickfind")
    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Create a test config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""
[search]
max_results = 5
max_depth = 3

[indexer]
enabled = false
timeout_seconds = 2.5

[output]
default_format = "plain"
""")
    return config_path
