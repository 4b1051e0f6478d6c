"""Chunk streams: a uniform async view over the byte sources we can match."""

import asyncio
import inspect
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, AsyncIterator, BinaryIO, Iterator, Optional, Union

from ...domain.models.options import DEFAULT_CHUNK_SIZE

Chunk = Union[bytes, bytearray, memoryview, str]


class ChunkStream(ABC):
    """
    Async iterator of chunks with an explicit close.

    Iteration ends when the source is exhausted. Errors raised by the
    source propagate out of ``__anext__`` unchanged.
    """

    name: str = "<stream>"

    def __aiter__(self) -> "ChunkStream":
        return self

    @abstractmethod
    async def __anext__(self) -> Chunk:
        pass

    @abstractmethod
    async def close(self):
        """Release the underlying source."""
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class FileChunkSource(ChunkStream):
    """
    Reads a file in fixed-size chunks.

    The file is opened on the first read, in a worker thread, so open
    errors surface from iteration like any other read error.
    """

    def __init__(self, path: Union[str, Path], chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.path = Path(path)
        self.chunk_size = chunk_size
        self.name = str(self.path)
        self._file: Optional[BinaryIO] = None
        self._closed = False

    @classmethod
    def open(cls, path: Union[str, Path], options: Any = None) -> "FileChunkSource":
        chunk_size = options.chunk_size if options is not None else DEFAULT_CHUNK_SIZE
        return cls(path, chunk_size=chunk_size)

    @property
    def closed(self) -> bool:
        return self._closed

    async def __anext__(self) -> bytes:
        if self._closed:
            raise StopAsyncIteration
        if self._file is None:
            self._file = await self._open()

        chunk = await asyncio.to_thread(self._file.read, self.chunk_size)
        if not chunk:
            raise StopAsyncIteration
        return chunk

    async def _open(self) -> BinaryIO:
        # The worker thread cannot be interrupted; if we are cancelled while it
        # runs, whatever it opens is closed as soon as it finishes.
        loop = asyncio.get_running_loop()
        opening = loop.run_in_executor(None, open, self.path, "rb")
        try:
            return await asyncio.shield(opening)
        except asyncio.CancelledError:
            opening.add_done_callback(_close_opened_file)
            raise

    async def close(self):
        self._closed = True
        if self._file is not None:
            self._file.close()
            self._file = None


class ReaderChunkStream(ChunkStream):
    """Wraps an object with a coroutine ``read(n)``, e.g. ``asyncio.StreamReader``."""

    def __init__(self, reader: Any, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.source = reader
        self.chunk_size = chunk_size
        self.name = _describe(reader)

    async def __anext__(self) -> Chunk:
        chunk = await self.source.read(self.chunk_size)
        if not chunk:
            raise StopAsyncIteration
        return chunk

    async def close(self):
        await _call_close(self.source)


class FileObjectChunkStream(ChunkStream):
    """Wraps a synchronous file object; reads happen in a worker thread."""

    def __init__(self, fileobj: Any, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.source = fileobj
        self.chunk_size = chunk_size
        self.name = _describe(fileobj)

    async def __anext__(self) -> Chunk:
        chunk = await asyncio.to_thread(self.source.read, self.chunk_size)
        if not chunk:
            raise StopAsyncIteration
        return chunk

    async def close(self):
        self.source.close()


class AsyncIterableChunkStream(ChunkStream):
    """Wraps an async iterable of chunks (async generators included)."""

    def __init__(self, iterable: Any):
        self.source = iterable
        self.name = _describe(iterable)
        self._iterator: AsyncIterator[Chunk] = iterable.__aiter__()

    async def __anext__(self) -> Chunk:
        return await self._iterator.__anext__()

    async def close(self):
        aclose = getattr(self._iterator, "aclose", None)
        if aclose is not None:
            await aclose()
        if self._iterator is not self.source:
            await _call_close(self.source)


class IterableChunkStream(ChunkStream):
    """Wraps an in-memory iterable of chunks."""

    def __init__(self, iterable: Any):
        self.source = iterable
        self.name = _describe(iterable)
        self._iterator: Iterator[Chunk] = iter(iterable)

    async def __anext__(self) -> Chunk:
        try:
            chunk = next(self._iterator)
        except StopIteration:
            raise StopAsyncIteration
        # Yield to the loop between chunks so sibling matches interleave
        await asyncio.sleep(0)
        return chunk

    async def close(self):
        close = getattr(self._iterator, "close", None)
        if close is not None:
            close()


def as_chunk_stream(source: Any, chunk_size: int = DEFAULT_CHUNK_SIZE) -> ChunkStream:
    """
    Adapt a supported stream object to a ``ChunkStream``.

    Args:
        source: ChunkStream, async reader, async iterable, file object or
            iterable of chunks
        chunk_size: Bytes requested per read for reader-like sources

    Returns:
        ChunkStream over the source

    Raises:
        TypeError: If the object is not a recognised stream shape
    """
    if isinstance(source, ChunkStream):
        return source

    if isinstance(source, (str, bytes, bytearray, memoryview)):
        raise TypeError(
            f"Expected a stream, got {type(source).__name__}; "
            "use a path operation or wrap the data in a list"
        )

    read = getattr(source, "read", None)
    if read is not None and inspect.iscoroutinefunction(read):
        return ReaderChunkStream(source, chunk_size)
    if hasattr(source, "__aiter__"):
        return AsyncIterableChunkStream(source)
    if read is not None and callable(read):
        return FileObjectChunkStream(source, chunk_size)
    if hasattr(source, "__iter__"):
        return IterableChunkStream(source)

    raise TypeError(f"Object of type {type(source).__name__} is not a readable stream")


async def _call_close(source: Any):
    close = getattr(source, "close", None)
    if close is None:
        return
    result = close()
    if inspect.isawaitable(result):
        await result


def _describe(source: Any) -> str:
    name = getattr(source, "name", None)
    if isinstance(name, (str, Path)):
        return str(name)
    return type(source).__name__


def _close_opened_file(opening: "asyncio.Future[BinaryIO]"):
    if opening.cancelled() or opening.exception() is not None:
        return
    opening.result().close()
