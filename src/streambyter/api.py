"""
Public matching operations.

Each operation comes in a boolean flavour (``match_*``, result is True or
False) and a capture-group flavour (``capture_*``, result is the mapping of
named groups of the first match, or None). Targets are either streams or
file paths, one at a time or as an ordered list.
"""

from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .domain.models import (
    GroupMapping,
    MatchMode,
    MatchRequest,
    MatchResult,
    ReadOptions,
    RequestLike,
)
from .domain.services import MatchPolicy, PatternLike, compile_pattern, policy_for
from .infrastructure.parallel import MatchFanOut
from .infrastructure.streaming import (
    ChunkStream,
    FileChunkSource,
    StreamMatcher,
    as_chunk_stream,
)


async def match_stream(
    request: RequestLike,
    pattern: PatternLike,
    options: Optional[ReadOptions] = None,
) -> MatchResult[bool]:
    """
    Test whether a stream's content matches the pattern.

    Args:
        request: MatchRequest or record with a ``stream``, or a bare stream
        pattern: Regular expression
        options: Read/decoding options

    Returns:
        MatchResult whose ``result`` is True or False
    """
    options = options or ReadOptions()
    policy = policy_for(MatchMode.BOOLEAN, compile_pattern(pattern))
    prepared = _prepare_stream(_stream_request(request), options)
    return await _match_stream(prepared, policy, options)


async def capture_stream(
    request: RequestLike,
    pattern: PatternLike,
    options: Optional[ReadOptions] = None,
) -> MatchResult[GroupMapping]:
    """
    Extract the named groups of the first match in a stream.

    Args:
        request: MatchRequest or record with a ``stream``, or a bare stream
        pattern: Regular expression with named groups
        options: Read/decoding options

    Returns:
        MatchResult whose ``result`` is the group mapping, or None
    """
    options = options or ReadOptions()
    policy = policy_for(MatchMode.GROUPS, compile_pattern(pattern))
    prepared = _prepare_stream(_stream_request(request), options)
    return await _match_stream(prepared, policy, options)


async def match_path(
    request: RequestLike,
    pattern: PatternLike,
    options: Optional[ReadOptions] = None,
) -> MatchResult[bool]:
    """
    Open a file and test whether its content matches the pattern.

    Args:
        request: MatchRequest or record with a ``path``, or a bare path
        pattern: Regular expression
        options: Read options (512-byte chunks when omitted)

    Returns:
        MatchResult whose ``result`` is True or False
    """
    policy = policy_for(MatchMode.BOOLEAN, compile_pattern(pattern))
    return await _match_path(_path_request(request), policy, options)


async def capture_path(
    request: RequestLike,
    pattern: PatternLike,
    options: Optional[ReadOptions] = None,
) -> MatchResult[GroupMapping]:
    """
    Open a file and extract the named groups of the first match.

    Args:
        request: MatchRequest or record with a ``path``, or a bare path
        pattern: Regular expression with named groups
        options: Read options (512-byte chunks when omitted)

    Returns:
        MatchResult whose ``result`` is the group mapping, or None
    """
    policy = policy_for(MatchMode.GROUPS, compile_pattern(pattern))
    return await _match_path(_path_request(request), policy, options)


async def match_streams(
    requests: Sequence[RequestLike],
    pattern: PatternLike,
    options: Optional[ReadOptions] = None,
    max_concurrency: Optional[int] = None,
) -> List[MatchResult[bool]]:
    """Run ``match_stream`` over every request concurrently, results in input order."""
    policy = policy_for(MatchMode.BOOLEAN, compile_pattern(pattern))
    options = options or ReadOptions()
    prepared = [_prepare_stream(_stream_request(r), options) for r in requests]
    return await MatchFanOut(max_concurrency).run(
        prepared, lambda p: _match_stream(p, policy, options)
    )


async def capture_streams(
    requests: Sequence[RequestLike],
    pattern: PatternLike,
    options: Optional[ReadOptions] = None,
    max_concurrency: Optional[int] = None,
) -> List[MatchResult[GroupMapping]]:
    """Run ``capture_stream`` over every request concurrently, results in input order."""
    policy = policy_for(MatchMode.GROUPS, compile_pattern(pattern))
    options = options or ReadOptions()
    prepared = [_prepare_stream(_stream_request(r), options) for r in requests]
    return await MatchFanOut(max_concurrency).run(
        prepared, lambda p: _match_stream(p, policy, options)
    )


async def match_paths(
    requests: Sequence[RequestLike],
    pattern: PatternLike,
    options: Optional[ReadOptions] = None,
    max_concurrency: Optional[int] = None,
) -> List[MatchResult[bool]]:
    """
    Run ``match_path`` over every request concurrently.

    With ``max_concurrency`` set, a file is only opened once its slot is
    acquired.
    """
    policy = policy_for(MatchMode.BOOLEAN, compile_pattern(pattern))
    normalized = [_path_request(r) for r in requests]
    return await MatchFanOut(max_concurrency).run(
        normalized, lambda r: _match_path(r, policy, options)
    )


async def capture_paths(
    requests: Sequence[RequestLike],
    pattern: PatternLike,
    options: Optional[ReadOptions] = None,
    max_concurrency: Optional[int] = None,
) -> List[MatchResult[GroupMapping]]:
    """Run ``capture_path`` over every request concurrently, results in input order."""
    policy = policy_for(MatchMode.GROUPS, compile_pattern(pattern))
    normalized = [_path_request(r) for r in requests]
    return await MatchFanOut(max_concurrency).run(
        normalized, lambda r: _match_path(r, policy, options)
    )


def _prepare_stream(
    request: MatchRequest,
    options: ReadOptions,
) -> Tuple[MatchRequest, ChunkStream]:
    # Adapting up front rejects unsupported objects before any stream is read
    return request, as_chunk_stream(request.stream, options.chunk_size)


async def _match_stream(
    prepared: Tuple[MatchRequest, ChunkStream],
    policy: MatchPolicy,
    options: ReadOptions,
) -> MatchResult:
    request, stream = prepared
    result = await StreamMatcher(policy, options).match(stream)
    return MatchResult.for_request(request, result)


async def _match_path(
    request: MatchRequest,
    policy: MatchPolicy,
    options: Optional[ReadOptions],
) -> MatchResult:
    options = options or ReadOptions()
    source = FileChunkSource.open(request.path, options)
    result = await StreamMatcher(policy, options).match(source)
    return MatchResult(
        stream=source,
        path=request.path,
        context=request.context,
        result=result,
    )


def _stream_request(request: Any) -> MatchRequest:
    if isinstance(request, MatchRequest):
        normalized = request
    elif isinstance(request, Mapping):
        normalized = MatchRequest.from_mapping(request)
    elif isinstance(request, (str, Path)):
        raise TypeError("Stream operations take streams; use a path operation for paths")
    else:
        normalized = MatchRequest(stream=request)

    if normalized.stream is None:
        raise ValueError(f"Request for {normalized.target} has no stream")
    return normalized


def _path_request(request: Any) -> MatchRequest:
    if isinstance(request, MatchRequest):
        normalized = request
    elif isinstance(request, Mapping):
        normalized = MatchRequest.from_mapping(request)
    elif isinstance(request, (str, Path)):
        normalized = MatchRequest(path=Path(request))
    else:
        raise TypeError(f"Expected a path or path record, got {type(request).__name__}")

    if normalized.path is None:
        raise ValueError(f"Request for {normalized.target} has no path")
    return normalized
