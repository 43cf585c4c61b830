"""Data model for file search: filters, results and parsed queries."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from quickfind.utils.files import file_extension, get_file_size_human, home_directory


class FileType(str, Enum):
    """Coarse file category derived from the extension."""

    DIRECTORY = "directory"
    DOCUMENT = "document"
    SPREADSHEET = "spreadsheet"
    PRESENTATION = "presentation"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    ARCHIVE = "archive"
    CODE = "code"
    APP = "app"
    DISK = "disk"
    PDF = "pdf"
    OTHER = "other"

    @property
    def icon(self) -> str:
        """Display glyph for this file type."""
        return _ICONS[self]

    @classmethod
    def from_extension(cls, ext: str) -> "FileType":
        """Classify a file by its extension (with or without the dot)."""
        return _EXTENSION_TYPES.get(ext.lower().lstrip("."), cls.OTHER)


_ICONS = {
    FileType.DIRECTORY: "📁",
    FileType.PDF: "📕",
    FileType.DOCUMENT: "📘",
    FileType.SPREADSHEET: "📗",
    FileType.PRESENTATION: "📙",
    FileType.IMAGE: "🖼",
    FileType.VIDEO: "🎬",
    FileType.AUDIO: "🎵",
    FileType.ARCHIVE: "📦",
    FileType.CODE: "💻",
    FileType.APP: "📱",
    FileType.DISK: "💿",
    FileType.OTHER: "📄",
}

_TYPE_EXTENSIONS: dict[FileType, tuple[str, ...]] = {
    FileType.PDF: ("pdf",),
    FileType.DOCUMENT: ("doc", "docx", "txt", "rtf", "md", "pages"),
    FileType.SPREADSHEET: ("xls", "xlsx", "csv", "numbers"),
    FileType.PRESENTATION: ("ppt", "pptx", "key", "keynote"),
    FileType.IMAGE: (
        "jpg", "jpeg", "png", "gif", "webp", "heic", "svg", "tiff", "bmp", "ico",
    ),
    FileType.VIDEO: ("mp4", "mov", "avi", "mkv", "wmv", "flv", "webm"),
    FileType.AUDIO: ("mp3", "wav", "m4a", "flac", "aac", "ogg", "wma"),
    FileType.ARCHIVE: ("zip", "rar", "7z", "tar", "gz", "bz2", "xz", "dmg"),
    FileType.CODE: (
        "swift", "py", "js", "ts", "go", "rs", "java", "c", "cpp", "h", "m",
        "rb", "php", "sh", "lua", "json", "yaml", "yml", "toml", "xml",
        "html", "css",
    ),
    FileType.APP: ("app",),
    FileType.DISK: ("iso", "img"),
}

_EXTENSION_TYPES = {
    ext: file_type for file_type, exts in _TYPE_EXTENSIONS.items() for ext in exts
}


def _normalize_extensions(extensions: Iterable[str] | None) -> frozenset[str] | None:
    if extensions is None:
        return None
    cleaned = frozenset(ext.strip().lstrip(".").lower() for ext in extensions)
    return frozenset(ext for ext in cleaned if ext)


@dataclass(frozen=True)
class SearchFilter:
    """Structured constraints on search results.

    Every field is optional; an absent field does not constrain anything.
    Instances are built once per query and never mutated.
    """

    extensions: frozenset[str] | None = None
    min_size: int | None = None
    max_size: int | None = None
    modified_after: datetime | None = None
    modified_before: datetime | None = None
    is_directory: bool | None = None
    search_paths: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "extensions", _normalize_extensions(self.extensions))
        if self.search_paths is not None:
            object.__setattr__(self, "search_paths", tuple(self.search_paths))

    @property
    def is_empty(self) -> bool:
        """True when no field constrains the result set."""
        return (
            not self.extensions
            and self.min_size is None
            and self.max_size is None
            and self.modified_after is None
            and self.modified_before is None
            and self.is_directory is None
            and not self.search_paths
        )

    def roots(self) -> list[str]:
        """Directories to search, defaulting to the user's home."""
        if self.search_paths:
            return list(self.search_paths)
        return [home_directory()]

    def matches(
        self,
        size: int,
        modified: datetime,
        extension: str,
        is_dir: bool,
    ) -> bool:
        """Check a candidate entry against every present constraint."""
        if self.min_size is not None and size < self.min_size:
            return False
        if self.max_size is not None and size > self.max_size:
            return False
        if self.modified_after is not None and modified < self.modified_after:
            return False
        if self.modified_before is not None and modified > self.modified_before:
            return False
        if self.extensions and extension.lower() not in self.extensions:
            return False
        if self.is_directory is not None and self.is_directory != is_dir:
            return False
        return True


@dataclass(frozen=True)
class SearchResult:
    """A single matching filesystem entry."""

    path: str
    name: str
    size: int
    modified_date: datetime
    file_type: FileType
    inode: int
    match_score: float

    @property
    def extension(self) -> str:
        return file_extension(self.name)

    @property
    def size_string(self) -> str:
        return get_file_size_human(self.size)

    @property
    def icon(self) -> str:
        return self.file_type.icon

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON-compatible types."""
        return {
            "path": self.path,
            "name": self.name,
            "size": self.size,
            "modified_date": self.modified_date.isoformat(),
            "file_type": self.file_type.value,
            "inode": self.inode,
            "match_score": round(self.match_score, 4),
        }


@dataclass(frozen=True)
class ParsedQuery:
    """A raw query split into a free-text term and a filter."""

    term: str
    filter: SearchFilter = field(default_factory=SearchFilter)

    @property
    def is_broad(self) -> bool:
        """An empty term asks for every entry that satisfies the filter."""
        return not self.term.strip()


def _by_score(result: SearchResult) -> tuple[float, str, str]:
    return (-result.match_score, result.name.casefold(), result.path)


def _by_recency(result: SearchResult) -> tuple[float, str, str]:
    return (-result.modified_date.timestamp(), result.name.casefold(), result.path)


def sort_results(results: list[SearchResult], broad_match: bool) -> list[SearchResult]:
    """Order results for display.

    Broad matches are newest first, then by case-insensitive name.
    Ranked matches are best score first; name and path break ties so the
    order is stable across runs.
    """
    return sorted(results, key=_by_recency if broad_match else _by_score)
