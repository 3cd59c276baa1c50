"""dirlist：列出目录内容（纯名称 / long 格式、递归、隐藏文件、人类可读大小、只计数）。"""

from dirlist.driver import list_paths
from dirlist.errors import (
    EXIT_ERROR,
    EXIT_LOOKUP,
    EXIT_NOT_FOUND,
    EXIT_OK,
    EXIT_OTHER,
    EXIT_PERMISSION,
    Cause,
    ErrorAggregator,
)
from dirlist.formatter import format_date, format_entry, format_size_human
from dirlist.models import EntrySnapshot, EntryType, PathConfiguration
from dirlist.resolver import resolve
from dirlist.walker import ListingState, walk

__all__ = [
    "list_paths",
    "walk",
    "resolve",
    "format_entry",
    "format_size_human",
    "format_date",
    "ListingState",
    "ErrorAggregator",
    "Cause",
    "EntrySnapshot",
    "EntryType",
    "PathConfiguration",
    "EXIT_OK",
    "EXIT_ERROR",
    "EXIT_NOT_FOUND",
    "EXIT_PERMISSION",
    "EXIT_LOOKUP",
    "EXIT_OTHER",
]
