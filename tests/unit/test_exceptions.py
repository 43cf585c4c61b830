"""Tests for exception hierarchy."""

from pathlib import Path

import pytest

from quickfind.exceptions import (
    CommandError,
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
    IndexerFailedError,
    IndexerNotFoundError,
    IndexerTimeoutError,
    InvalidArgumentError,
    QuickFindError,
    SearchError,
)


class TestQuickFindError:
    """Tests for base QuickFindError."""

    def test_default_message(self) -> None:
        """Test default error message."""
        error = QuickFindError()
        assert str(error) == "An error occurred"
        assert error.user_message == "An error occurred"
        assert error.exit_code == 1

    def test_custom_message(self) -> None:
        """Test custom error message."""
        error = QuickFindError("Custom error")
        assert str(error) == "Custom error"
        assert error.user_message == "An error occurred"

    def test_custom_user_message(self) -> None:
        """Test custom user message."""
        error = QuickFindError("Internal", user_message="User-friendly message")
        assert error.user_message == "User-friendly message"
        assert QuickFindError.user_message == "An error occurred"


class TestSearchErrors:
    """Tests for fast-path indexer errors."""

    def test_indexer_not_found(self) -> None:
        """Test missing fd error."""
        error = IndexerNotFoundError()
        assert error.exit_code == 31
        assert "fd" in error.user_message

    def test_indexer_timeout(self) -> None:
        """Test timeout error."""
        error = IndexerTimeoutError(5.0)
        assert error.exit_code == 32
        assert error.timeout == 5.0
        assert str(error) == "fd exceeded 5.0s"

    def test_indexer_failed(self) -> None:
        """Test failed run error."""
        error = IndexerFailedError("fd exited with status 2", returncode=2)
        assert error.exit_code == 33
        assert error.returncode == 2
        assert IndexerFailedError().returncode is None


class TestExitCodes:
    """Tests for distinct exit codes."""

    def test_codes_unique(self) -> None:
        """Test that each error class has its own exit code."""
        classes = [
            QuickFindError,
            ConfigError,
            ConfigNotFoundError,
            ConfigValidationError,
            SearchError,
            IndexerNotFoundError,
            IndexerTimeoutError,
            IndexerFailedError,
            CommandError,
            InvalidArgumentError,
        ]
        codes = [cls.exit_code for cls in classes]
        assert len(codes) == len(set(codes))


class TestExceptionHierarchy:
    """Tests for exception inheritance."""

    @pytest.mark.parametrize(
        ("child", "parent"),
        [
            (ConfigNotFoundError, ConfigError),
            (ConfigValidationError, ConfigError),
            (IndexerNotFoundError, SearchError),
            (IndexerTimeoutError, SearchError),
            (IndexerFailedError, SearchError),
            (InvalidArgumentError, CommandError),
            (SearchError, QuickFindError),
            (ConfigError, QuickFindError),
            (CommandError, QuickFindError),
        ],
    )
    def test_inheritance(self, child: type, parent: type) -> None:
        """Test subclass relationships."""
        assert issubclass(child, parent)

    def test_catch_search_errors(self) -> None:
        """Test catching all indexer errors as SearchError."""
        with pytest.raises(SearchError):
            raise IndexerTimeoutError(1.0)


class TestConfigErrors:
    """Tests for configuration errors."""

    def test_path_recorded(self, temp_dir: Path) -> None:
        """Test that the offending file is kept on the error."""
        error = ConfigValidationError("bad value", path=temp_dir / "config.toml")

        assert error.path == temp_dir / "config.toml"
        assert error.exit_code == 22
        assert ConfigError().path is None
