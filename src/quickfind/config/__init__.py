"""Configuration management."""

from quickfind.config.loader import get_config, load_config, reset_config
from quickfind.config.schema import QuickFindConfig

__all__ = ["QuickFindConfig", "get_config", "load_config", "reset_config"]
