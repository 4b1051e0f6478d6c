"""Pytest configuration and fixtures for streambyter tests."""

import asyncio
import json
import random
import shutil
import tempfile
from pathlib import Path
from typing import AsyncIterator, Generator, List, Optional

import pytest

from streambyter.infrastructure.logging import StreambyterLogger


@pytest.fixture(autouse=True)
def reset_logger() -> Generator[None, None, None]:
    """Give every test a fresh, unconfigured logger."""
    StreambyterLogger.reset()
    yield
    StreambyterLogger.reset()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Provide a temporary directory for test files.

    Automatically cleaned up after the test completes.
    """
    temp_path = Path(tempfile.mkdtemp(prefix="streambyter_test_")).resolve()
    try:
        yield temp_path
    finally:
        if temp_path.exists():
            shutil.rmtree(temp_path)


@pytest.fixture
def sample_json_content() -> str:
    """The small JSON document most matching tests run against."""
    return json.dumps({"a": 1, "b": 2, "c": 3}, separators=(",", ":"))


@pytest.fixture
def sample_json_file(temp_dir, sample_json_content) -> Path:
    """sample_json_content written to disk."""
    path = temp_dir / "test-1.json"
    path.write_text(sample_json_content)
    return path


class RecordingStream:
    """
    Async reader over in-memory bytes that records how it was used.

    ``read`` is a coroutine, so it is adapted like ``asyncio.StreamReader``.
    """

    def __init__(
        self,
        data: bytes,
        delay: float = 0.0,
        fail_after: Optional[int] = None,
        close_error: Optional[Exception] = None,
        name: str = "memory",
    ):
        self.data = data
        self.delay = delay
        self.fail_after = fail_after
        self.close_error = close_error
        self.name = name
        self.position = 0
        self.reads = 0
        self.closed = False

    async def read(self, n: int = -1) -> bytes:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.closed:
            raise ValueError("read from closed stream")
        if self.fail_after is not None and self.reads >= self.fail_after:
            raise OSError("simulated read failure")
        self.reads += 1
        if n < 0:
            n = len(self.data) - self.position
        chunk = self.data[self.position:self.position + n]
        self.position += len(chunk)
        return chunk

    def close(self):
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


async def async_chunks(data: bytes, size: int) -> AsyncIterator[bytes]:
    """Yield ``data`` in pieces of ``size`` bytes."""
    for i in range(0, len(data), size):
        await asyncio.sleep(0)
        yield data[i:i + size]


WORDS = [
    "alpha", "bravo", "charlie", "delta", "echo", "foxtrot",
    "golf", "hotel", "india", "juliet", "kilo", "lima",
]


def random_json_document(rng: random.Random, marker: Optional[str] = None) -> str:
    """
    Build a random JSON document, optionally holding a ``marker`` key.

    The marker is placed at a random position among the other keys.
    """
    items = [(f"{rng.choice(WORDS)}_{i}", rng.randint(0, 10_000)) for i in range(rng.randint(3, 12))]
    if marker is not None:
        items.insert(rng.randint(0, len(items)), (marker, rng.choice(WORDS)))
    return json.dumps(dict(items))


def generate_json_files(
    directory: Path,
    count: int,
    marker: Optional[str] = "foo",
    seed: int = 1234,
) -> List[Path]:
    """
    Write ``count`` random JSON files into ``directory``.

    Args:
        directory: Target directory (created if needed)
        count: Number of files
        marker: Key inserted into every document (None for no marker)
        seed: Random seed, so runs are reproducible

    Returns:
        Paths of the written files
    """
    rng = random.Random(seed)
    directory.mkdir(parents=True, exist_ok=True)
    paths = []
    for i in range(count):
        path = directory / f"test-{i}.json"
        path.write_text(random_json_document(rng, marker))
        paths.append(path)
    return paths
