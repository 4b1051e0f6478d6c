"""Tests for chunk stream adapters."""

import asyncio
import io
import threading

import pytest

from streambyter import match_paths
from streambyter.infrastructure.streaming import chunk_source
from streambyter.infrastructure.streaming import (
    AsyncIterableChunkStream,
    FileChunkSource,
    FileObjectChunkStream,
    IterableChunkStream,
    ReaderChunkStream,
    as_chunk_stream,
)
from tests.conftest import RecordingStream, async_chunks


async def collect(stream) -> list:
    return [chunk async for chunk in stream]


class TestAsChunkStream:

    def test_async_reader(self):
        assert isinstance(as_chunk_stream(RecordingStream(b"x")), ReaderChunkStream)

    async def test_asyncio_stream_reader(self):
        reader = asyncio.StreamReader()
        reader.feed_data(b"payload")
        reader.feed_eof()
        stream = as_chunk_stream(reader, chunk_size=3)
        assert isinstance(stream, ReaderChunkStream)
        assert b"".join(await collect(stream)) == b"payload"

    async def test_async_iterable(self):
        assert isinstance(as_chunk_stream(async_chunks(b"x", 1)), AsyncIterableChunkStream)

    def test_file_object(self):
        assert isinstance(as_chunk_stream(io.BytesIO(b"x")), FileObjectChunkStream)

    def test_iterable(self):
        assert isinstance(as_chunk_stream([b"x"]), IterableChunkStream)

    def test_chunk_stream_returned_unchanged(self, temp_dir):
        source = FileChunkSource(temp_dir / "f")
        assert as_chunk_stream(source) is source

    @pytest.mark.parametrize("value", ["text", b"bytes", 42, None])
    def test_rejects_non_streams(self, value):
        with pytest.raises(TypeError):
            as_chunk_stream(value)


class TestFileChunkSource:

    async def test_reads_in_chunk_size_pieces(self, temp_dir):
        path = temp_dir / "data.bin"
        path.write_bytes(b"abcdefghij")
        chunks = await collect(FileChunkSource(path, chunk_size=4))
        assert chunks == [b"abcd", b"efgh", b"ij"]

    async def test_default_chunk_size(self, temp_dir):
        path = temp_dir / "data.bin"
        path.write_bytes(b"x" * 1300)
        chunks = await collect(FileChunkSource.open(path))
        assert [len(c) for c in chunks] == [512, 512, 276]

    async def test_open_is_lazy(self, temp_dir):
        source = FileChunkSource(temp_dir / "missing.txt")
        assert source.name.endswith("missing.txt")
        with pytest.raises(FileNotFoundError):
            await source.__anext__()

    async def test_directory_error_surfaces_on_read(self, temp_dir):
        source = FileChunkSource(temp_dir)
        with pytest.raises(OSError):
            await collect(source)

    async def test_cancel_during_open_closes_file(self, temp_dir, monkeypatch):
        path = temp_dir / "slow.txt"
        path.write_bytes(b"data")
        release = threading.Event()
        opened = []

        def gated_open(*args, **kwargs):
            release.wait(5)
            f = io.open(*args, **kwargs)
            opened.append(f)
            return f

        monkeypatch.setattr(chunk_source, "open", gated_open, raising=False)

        task = asyncio.ensure_future(match_paths([path], "data"))
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        release.set()
        for _ in range(200):
            if opened and opened[0].closed:
                break
            await asyncio.sleep(0.01)

        assert len(opened) == 1
        assert opened[0].closed

    async def test_close_stops_iteration(self, temp_dir):
        path = temp_dir / "data.bin"
        path.write_bytes(b"abcdef")
        source = FileChunkSource(path, chunk_size=2)
        assert await source.__anext__() == b"ab"
        await source.close()
        assert source.closed
        with pytest.raises(StopAsyncIteration):
            await source.__anext__()


class TestOtherAdapters:

    async def test_reader_chunks_and_close(self):
        reader = RecordingStream(b"abcde")
        stream = as_chunk_stream(reader, chunk_size=2)
        assert await collect(stream) == [b"ab", b"cd", b"e"]
        await stream.close()
        assert reader.closed

    async def test_file_object_chunks_and_close(self):
        fileobj = io.BytesIO(b"abcde")
        stream = as_chunk_stream(fileobj, chunk_size=3)
        assert await collect(stream) == [b"abc", b"de"]
        await stream.close()
        assert fileobj.closed

    async def test_text_file_object(self):
        stream = as_chunk_stream(io.StringIO("hello"), chunk_size=2)
        assert await collect(stream) == ["he", "ll", "o"]

    async def test_async_generator_closed_early(self):
        finished = []

        async def produce():
            try:
                for i in range(100):
                    yield str(i).encode()
            finally:
                finished.append(True)

        stream = as_chunk_stream(produce())
        assert await stream.__anext__() == b"0"
        await stream.close()
        assert finished == [True]

    async def test_iterable_chunks(self):
        assert await collect(as_chunk_stream([b"a", "b"])) == [b"a", "b"]
