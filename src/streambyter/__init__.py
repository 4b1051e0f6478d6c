"""Incremental regular-expression matching over byte streams and files."""

__version__ = "1.0.0"

from .api import (
    capture_path,
    capture_paths,
    capture_stream,
    capture_streams,
    match_path,
    match_paths,
    match_stream,
    match_streams,
)
from .domain.exceptions import ConfigurationError, InvalidPatternError, StreambyterError
from .domain.models import GroupMapping, MatchMode, MatchRequest, MatchResult, ReadOptions
from .domain.services import compile_pattern

__all__ = [
    "__version__",
    "capture_path",
    "capture_paths",
    "capture_stream",
    "capture_streams",
    "match_path",
    "match_paths",
    "match_stream",
    "match_streams",
    "ConfigurationError",
    "InvalidPatternError",
    "StreambyterError",
    "GroupMapping",
    "MatchMode",
    "MatchRequest",
    "MatchResult",
    "ReadOptions",
    "compile_pattern",
]
