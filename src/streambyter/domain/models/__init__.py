"""Domain models for streambyter."""

from .match import GroupMapping, MatchMode, MatchRequest, MatchResult, RequestLike
from .options import DEFAULT_CHUNK_SIZE, ReadOptions

__all__ = [
    "GroupMapping",
    "MatchMode",
    "MatchRequest",
    "MatchResult",
    "RequestLike",
    "DEFAULT_CHUNK_SIZE",
    "ReadOptions",
]
