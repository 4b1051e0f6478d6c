"""Integration tests matching across many generated JSON files.

Every file holds a random document; the ``foo`` key is inserted at a random
position when the scenario calls for a match.
"""

import io

import pytest

from streambyter import (
    ReadOptions,
    capture_paths,
    capture_streams,
    match_paths,
    match_streams,
)

from tests.conftest import generate_json_files

FILE_COUNT = 1000
BOOLEAN_PATTERN = r'"foo"'
GROUP_PATTERN = r'"foo":\s*"(?<value>\w+)".*?'


@pytest.mark.integration
class TestManyFiles:
    """Fan-out over a thousand files, bounded so descriptors stay available."""

    @pytest.fixture
    def files_with_marker(self, temp_dir):
        return generate_json_files(temp_dir / "matched", FILE_COUNT, marker="foo")

    @pytest.fixture
    def files_without_marker(self, temp_dir):
        return generate_json_files(temp_dir / "unmatched", FILE_COUNT, marker=None)

    async def test_every_file_matches(self, files_with_marker):
        results = await match_paths(
            [{"path": p, "index": i} for i, p in enumerate(files_with_marker)],
            BOOLEAN_PATTERN,
            max_concurrency=100,
        )
        assert len(results) == FILE_COUNT
        assert all(r.result is True for r in results)
        assert [r.context["index"] for r in results] == list(range(FILE_COUNT))

    async def test_no_file_matches(self, files_without_marker):
        results = await match_paths(files_without_marker, BOOLEAN_PATTERN, max_concurrency=100)
        assert [r.path for r in results] == files_without_marker
        assert not any(r.result for r in results)

    async def test_every_file_captures(self, files_with_marker):
        results = await capture_paths(files_with_marker, GROUP_PATTERN, max_concurrency=100)
        assert all(set(r.result) == {"value"} for r in results)

    async def test_no_file_captures(self, files_without_marker):
        results = await capture_paths(files_without_marker, GROUP_PATTERN, max_concurrency=100)
        assert all(r.result is None for r in results)

    async def test_single_byte_chunks(self, temp_dir):
        paths = generate_json_files(temp_dir / "small", 100, marker="foo", seed=99)
        results = await capture_paths(
            paths, GROUP_PATTERN, ReadOptions(chunk_size=1), max_concurrency=50
        )
        assert all(r.result is not None for r in results)

    async def test_unbounded_paths(self, temp_dir):
        paths = generate_json_files(temp_dir / "unbounded", 50, marker="foo", seed=7)
        results = await match_paths(paths, BOOLEAN_PATTERN)
        assert all(r.matched for r in results)


@pytest.mark.integration
class TestManyStreams:
    """Unbounded fan-out over in-memory streams."""

    async def test_streams_match_in_order(self, temp_dir):
        paths = generate_json_files(temp_dir, FILE_COUNT, marker=None)
        streams = [io.BytesIO(p.read_bytes()) for p in paths]
        streams[10] = io.BytesIO(b'{"foo": "x"}')

        results = await match_streams(streams, BOOLEAN_PATTERN)
        assert [i for i, r in enumerate(results) if r.result] == [10]
        assert all(s.closed for s in streams)

    async def test_streams_capture(self, temp_dir):
        paths = generate_json_files(temp_dir, FILE_COUNT, marker="foo")
        results = await capture_streams(
            [{"stream": io.BytesIO(p.read_bytes()), "name": p.name} for p in paths],
            GROUP_PATTERN,
        )
        assert [r.context["name"] for r in results] == [p.name for p in paths]
        assert all(r.result["value"] for r in results)
