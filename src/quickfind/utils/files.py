"""File name and size helpers shared by both traversal strategies."""

import os
from pathlib import Path

# Directories never descended into by the deep walk
NOISE_DIRS = frozenset(
    {
        ".git",
        ".svn",
        ".hg",
        "node_modules",
        ".build",
        ".Trash",
        "Library",
        ".cache",
        "DerivedData",
        "Pods",
        "__pycache__",
        ".venv",
        "venv",
        "build",
        "dist",
        "target",
    }
)


def is_hidden(name: str) -> bool:
    """Check if a file or directory name is hidden (starts with .)."""
    return name.startswith(".")


def should_prune_dir(name: str) -> bool:
    """Check if a directory should be skipped during traversal.

    Args:
        name: Directory basename.

    Returns:
        True if the directory is hidden or a known noise directory.
    """
    return is_hidden(name) or name in NOISE_DIRS


def file_extension(name: str) -> str:
    """Return the lowercase extension of a file name without the dot.

    ``"Report.PDF"`` gives ``"pdf"``; ``".bashrc"`` and ``"Makefile"``
    give ``""``.
    """
    return os.path.splitext(name)[1][1:].lower()


def strip_extension(name: str) -> str:
    """Return the file name without its last extension."""
    return os.path.splitext(name)[0]


def expand_path(path: str) -> str:
    """Expand ``~`` and make a path absolute."""
    return os.path.abspath(os.path.expanduser(path))


def home_directory() -> str:
    """Return the current user's home directory."""
    return str(Path.home())


def get_file_size_human(size_bytes: int) -> str:
    """Convert file size to human-readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Human-readable size string.
    """
    size: float = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size < 1024:
            if unit == "B":
                return f"{int(size)} {unit}"
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} PB"
