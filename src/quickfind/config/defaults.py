"""Config file location, environment variable names and the default file."""

import os
from pathlib import Path
from typing import Final

CONFIG_FILENAME: Final[str] = "config.toml"

ENV_CONFIG_PATH: Final[str] = "QUICKFIND_CONFIG"
ENV_LOG_LEVEL: Final[str] = "QUICKFIND_LOG_LEVEL"
ENV_FD_PATH: Final[str] = "QUICKFIND_FD_PATH"
ENV_NO_INDEXER: Final[str] = "QUICKFIND_NO_INDEXER"

# Well-known install locations of the fd indexer, checked before PATH
FD_CANDIDATE_PATHS: Final[tuple[str, ...]] = (
    "/opt/homebrew/bin/fd",  # Apple Silicon Homebrew
    "/usr/local/bin/fd",  # Intel Homebrew
    "/opt/local/bin/fd",  # MacPorts
    "~/.local/bin/fd",
    "~/.cargo/bin/fd",
    "~/.nix-profile/bin/fd",
    "~/bin/fd",
    "~/.local/bin/fdfind",
    "~/bin/fdfind",
)

# Written on first run; every value matches the schema default
DEFAULT_CONFIG_TOML: Final[str] = """\
# quickfind configuration

[search]
max_results = 20
max_depth = 8
min_fuzzy_score = 0.1
fast_score_floor = 0.5
walk_budget_seconds = 10.0
max_workers = 8

[indexer]
enabled = true
# executable = "/opt/homebrew/bin/fd"  # Or set QUICKFIND_FD_PATH
timeout_seconds = 5.0
max_lines = 50

[output]
default_format = "rich"
color = true

[logging]
level = "WARNING"
# file = "~/.cache/quickfind/quickfind.log"  # Always JSON
json_format = false
"""


def config_dir() -> Path:
    """``$XDG_CONFIG_HOME/quickfind``, falling back to ``~/.config/quickfind``."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / "quickfind"


def get_config_path() -> Path:
    """Config file named by ``QUICKFIND_CONFIG``, else the one in :func:`config_dir`."""
    override = os.environ.get(ENV_CONFIG_PATH)
    if override:
        return Path(override).expanduser()
    return config_dir() / CONFIG_FILENAME
