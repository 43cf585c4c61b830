"""Load quickfind configuration from TOML and the environment.

Precedence, lowest first: model defaults, the TOML file, ``QUICKFIND_*``
environment variables. The result is cached by :func:`get_config`.
"""

import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from quickfind.config.defaults import (
    DEFAULT_CONFIG_TOML,
    ENV_FD_PATH,
    ENV_LOG_LEVEL,
    ENV_NO_INDEXER,
    get_config_path,
)
from quickfind.config.schema import QuickFindConfig
from quickfind.exceptions import (
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
)

try:
    import tomllib
except ImportError:  # Python < 3.11
    import tomli as tomllib

_TRUTHY = frozenset({"1", "true", "yes"})

# Global config instance (singleton)
_config: QuickFindConfig | None = None


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = True,
) -> QuickFindConfig:
    """Load configuration from a TOML file and environment variables.

    Args:
        config_path: Config file to read. When None, ``QUICKFIND_CONFIG``
            or ``~/.config/quickfind/config.toml`` is used.
        create_if_missing: Write the commented default file when the
            config file does not exist yet.

    Returns:
        Validated configuration with environment overrides applied.

    Raises:
        ConfigNotFoundError: If an explicitly given file is missing and
            ``create_if_missing`` is False.
        ConfigError: If the file cannot be read or is not valid TOML.
        ConfigValidationError: If a value is out of range or mistyped.
    """
    path = config_path or get_config_path()

    if not path.exists():
        if create_if_missing:
            _write_default(path)
        elif config_path is not None:
            raise ConfigNotFoundError(f"No config file at {path}", path=path)
        else:
            return _apply_env_overrides(QuickFindConfig())

    data = _read_toml(path)
    try:
        config = QuickFindConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid configuration in {path}: {e}", path=path
        ) from e

    return _apply_env_overrides(config)


def _write_default(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG_TOML, encoding="utf-8")


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(
            f"Failed to load config from {path}: {e}", path=path
        ) from e


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


def _apply_env_overrides(config: QuickFindConfig) -> QuickFindConfig:
    """Apply ``QUICKFIND_*`` environment variables on top of the file."""
    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        config.logging.level = log_level.upper()

    fd_path = os.environ.get(ENV_FD_PATH)
    if fd_path:
        config.indexer.executable = Path(fd_path).expanduser()

    if _env_flag(ENV_NO_INDEXER):
        config.indexer.enabled = False

    return config


def get_config() -> QuickFindConfig:
    """Get the current configuration, loading it on first access."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the cached configuration (mainly for testing)."""
    global _config
    _config = None
