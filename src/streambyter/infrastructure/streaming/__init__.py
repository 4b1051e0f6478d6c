"""Streaming infrastructure: chunk sources and the incremental matcher."""

from .chunk_source import (
    AsyncIterableChunkStream,
    ChunkStream,
    FileChunkSource,
    FileObjectChunkStream,
    IterableChunkStream,
    ReaderChunkStream,
    as_chunk_stream,
)
from .stream_matcher import StreamMatcher

__all__ = [
    "AsyncIterableChunkStream",
    "ChunkStream",
    "FileChunkSource",
    "FileObjectChunkStream",
    "IterableChunkStream",
    "ReaderChunkStream",
    "as_chunk_stream",
    "StreamMatcher",
]
