"""Build search results from filesystem metadata."""

import os
import stat
from datetime import datetime

from quickfind.search.models import FileType, SearchResult
from quickfind.utils.files import file_extension


def file_type_for(name: str, is_dir: bool) -> FileType:
    if is_dir:
        return FileType.DIRECTORY
    return FileType.from_extension(file_extension(name))


def result_from_stat(
    path: str,
    name: str,
    st: os.stat_result,
    score: float,
) -> SearchResult:
    """Create a SearchResult from an ``os.stat`` / ``os.lstat`` record."""
    return SearchResult(
        path=path,
        name=name,
        size=st.st_size,
        modified_date=datetime.fromtimestamp(st.st_mtime),
        file_type=file_type_for(name, stat.S_ISDIR(st.st_mode)),
        inode=st.st_ino,
        match_score=score,
    )
