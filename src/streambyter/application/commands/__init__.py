"""Application commands."""

from .search_files import SearchFilesCommand, SearchFilesHandler, SearchReport

__all__ = [
    "SearchFilesCommand",
    "SearchFilesHandler",
    "SearchReport",
]
