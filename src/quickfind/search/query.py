"""Query filter language.

Turns free text such as ``"report -ext pdf,docx -size >2mb -time 2w"`` or
``"最近 pdf"`` into a search term plus a :class:`SearchFilter`.

Flag tokens::

    -size >N[kb|mb|gb]   minimum size      -size <N   maximum size
    -time Nd|Nw|Nm       modified within   -ext a,b   extensions
    -dir                 directories only  -in PATH   search root

Natural-language keywords (Chinese and English) are matched by exact token
value and never become part of the term.
"""

import calendar
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from quickfind.search.models import ParsedQuery, SearchFilter
from quickfind.utils.files import expand_path

LARGE_FILE_BYTES = 100 * 1024 * 1024

_SIZE_SUFFIXES: tuple[tuple[str, int], ...] = (
    ("gb", 1024**3),
    ("mb", 1024**2),
    ("kb", 1024),
    ("b", 1),
)

IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "gif", "webp", "heic")
VIDEO_EXTENSIONS = ("mp4", "mov", "avi", "mkv")
DOCUMENT_EXTENSIONS = ("pdf", "doc", "docx", "txt", "md", "pages")
AUDIO_EXTENSIONS = ("mp3", "wav", "m4a", "flac")
CODE_EXTENSIONS = ("swift", "py", "js", "ts", "java", "go", "rs", "c", "cpp", "h", "m")

# Bare extension names usable as keywords ("pdf", "jpg", ...)
EXTENSION_KEYWORDS: dict[str, tuple[str, ...]] = {
    "pdf": ("pdf",),
    "md": ("md",),
    "markdown": ("md",),
    "txt": ("txt",),
    "doc": ("doc", "docx"),
    "docx": ("docx",),
    "swift": ("swift",),
    "py": ("py",),
    "js": ("js",),
    "ts": ("ts",),
    "json": ("json",),
    "xml": ("xml",),
    "html": ("html",),
    "css": ("css",),
    "jpg": ("jpg", "jpeg"),
    "jpeg": ("jpg", "jpeg"),
    "png": ("png",),
    "gif": ("gif",),
    "webp": ("webp",),
    "heic": ("heic",),
    "mp4": ("mp4",),
    "mov": ("mov",),
    "avi": ("avi",),
    "mkv": ("mkv",),
    "mp3": ("mp3",),
    "wav": ("wav",),
    "m4a": ("m4a",),
    "zip": ("zip",),
    "rar": ("rar",),
}

CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "图片": IMAGE_EXTENSIONS,
    "照片": IMAGE_EXTENSIONS,
    "photo": IMAGE_EXTENSIONS,
    "photos": IMAGE_EXTENSIONS,
    "image": IMAGE_EXTENSIONS,
    "images": IMAGE_EXTENSIONS,
    "视频": VIDEO_EXTENSIONS,
    "video": VIDEO_EXTENSIONS,
    "videos": VIDEO_EXTENSIONS,
    "文档": DOCUMENT_EXTENSIONS,
    "document": DOCUMENT_EXTENSIONS,
    "documents": DOCUMENT_EXTENSIONS,
    "音乐": AUDIO_EXTENSIONS,
    "音频": AUDIO_EXTENSIONS,
    "music": AUDIO_EXTENSIONS,
    "audio": AUDIO_EXTENSIONS,
    "代码": CODE_EXTENSIONS,
    "代码文件": CODE_EXTENSIONS,
    "code": CODE_EXTENSIONS,
    "swift文件": ("swift",),
}

# Relative modification windows, in days; "month" uses calendar arithmetic
RECENCY_KEYWORDS: dict[str, str] = {
    "最近": "day",
    "今天": "day",
    "recent": "day",
    "recently": "day",
    "today": "day",
    "本周": "week",
    "this week": "week",
    "本月": "month",
    "this month": "month",
}

LARGE_FILE_KEYWORDS = frozenset({"大文件", "large file", "large files", "big file", "big files"})

_FLAG_ALIASES: dict[str, str] = {
    "-size": "size",
    "--size": "size",
    "-time": "time",
    "--time": "time",
    "-t": "time",
    "-ext": "ext",
    "--ext": "ext",
    "-e": "ext",
    "-dir": "dir",
    "--dir": "dir",
    "-in": "in",
    "--in": "in",
}
_FLAGS_WITH_ARGUMENT = frozenset({"size", "time", "ext", "in"})


def parse_size(text: str) -> int | None:
    """Parse a size such as ``"10mb"``, ``"1.5GB"`` or ``"2048"`` into bytes.

    Suffixes are binary multiples (``kb`` is 1024). Unsuffixed numbers are
    bytes. Returns None when the text is not a size.
    """
    lower = text.strip().lower()
    for suffix, multiplier in _SIZE_SUFFIXES:
        if lower.endswith(suffix):
            number = lower[: -len(suffix)]
            try:
                value = float(number)
            except ValueError:
                return None
            if not math.isfinite(value) or value < 0:
                return None
            return int(value * multiplier)
    try:
        value = int(lower)
    except ValueError:
        return None
    return value if value >= 0 else None


def parse_days(text: str) -> int | None:
    """Parse a relative age such as ``"3d"``, ``"2w"`` or ``"1m"`` into days.

    ``w`` is seven days and ``m`` an approximate thirty-day month. A bare
    number is taken as days.
    """
    lower = text.strip().lower()
    multipliers = {"d": 1, "w": 7, "m": 30}
    unit = multipliers.get(lower[-1:]) if lower else None
    number = lower[:-1] if unit else lower
    try:
        value = int(number)
    except ValueError:
        return None
    if value < 0:
        return None
    return value * (unit or 1)


def months_before(moment: datetime, months: int) -> datetime:
    """Step back whole calendar months, clamping to the month's last day."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _window_start(window: str, now: datetime) -> datetime:
    if window == "week":
        return now - timedelta(days=7)
    if window == "month":
        return months_before(now, 1)
    return now - timedelta(days=1)


@dataclass
class _FilterBuilder:
    """Mutable accumulator; frozen into a SearchFilter once parsing ends."""

    extensions: set[str] | None = None
    min_size: int | None = None
    max_size: int | None = None
    modified_after: datetime | None = None
    is_directory: bool | None = None
    search_paths: list[str] = field(default_factory=list)

    def add_extensions(self, extensions: tuple[str, ...] | list[str]) -> None:
        cleaned = {ext.strip().lstrip(".").lower() for ext in extensions}
        cleaned.discard("")
        if not cleaned:
            return
        if self.extensions is None:
            self.extensions = set()
        self.extensions |= cleaned

    def build(self) -> SearchFilter:
        return SearchFilter(
            extensions=frozenset(self.extensions) if self.extensions else None,
            min_size=self.min_size,
            max_size=self.max_size,
            modified_after=self.modified_after,
            is_directory=self.is_directory,
            search_paths=tuple(self.search_paths) or None,
        )


def _apply_flag(flag: str, argument: str, builder: _FilterBuilder, now: datetime) -> None:
    if flag == "size":
        size = parse_size(argument[1:])
        if size is None:
            return
        if argument.startswith(">"):
            builder.min_size = size
        elif argument.startswith("<"):
            builder.max_size = size
    elif flag == "time":
        days = parse_days(argument)
        if days is not None:
            builder.modified_after = now - timedelta(days=days)
    elif flag == "ext":
        builder.add_extensions(argument.split(","))
    elif flag == "in":
        builder.search_paths.append(expand_path(argument))


def _apply_keyword(keyword: str, builder: _FilterBuilder, now: datetime) -> bool:
    """Apply a natural-language keyword; False if it is not one."""
    if keyword in LARGE_FILE_KEYWORDS:
        builder.min_size = LARGE_FILE_BYTES
    elif keyword in RECENCY_KEYWORDS:
        builder.modified_after = _window_start(RECENCY_KEYWORDS[keyword], now)
    elif keyword in CATEGORY_KEYWORDS:
        builder.add_extensions(CATEGORY_KEYWORDS[keyword])
    elif keyword in EXTENSION_KEYWORDS:
        builder.add_extensions(EXTENSION_KEYWORDS[keyword])
    else:
        return False
    return True


def parse_query(raw: str, now: datetime | None = None) -> ParsedQuery:
    """Split raw query text into a search term and a filter.

    Args:
        raw: Query text with any leading verb ("find", "搜索") removed.
        now: Reference time for relative dates (defaults to now).

    Returns:
        ParsedQuery whose term is empty when every token was a filter.
    """
    now = now or datetime.now()
    builder = _FilterBuilder()
    term_parts: list[str] = []

    tokens = raw.split()
    i = 0
    while i < len(tokens):
        token = tokens[i]
        lower = token.lower()

        flag = _FLAG_ALIASES.get(lower)
        if flag is not None:
            if flag in _FLAGS_WITH_ARGUMENT:
                if i + 1 < len(tokens):
                    i += 1
                    argument = tokens[i] if flag == "in" else tokens[i].lower()
                    _apply_flag(flag, argument, builder, now)
            else:
                builder.is_directory = True
            i += 1
            continue

        if i + 1 < len(tokens):
            phrase = f"{lower} {tokens[i + 1].lower()}"
            if _apply_keyword(phrase, builder, now):
                i += 2
                continue

        if not _apply_keyword(lower, builder, now):
            term_parts.append(token)
        i += 1

    return ParsedQuery(term=" ".join(term_parts), filter=builder.build())
