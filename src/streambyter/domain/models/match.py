"""Match request and result domain models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Generic, Mapping, Optional, TypeVar, Union


# Outcome of a capture-group match: group name -> captured text.
# Groups that did not take part in the match map to None.
GroupMapping = Dict[str, Optional[str]]

R = TypeVar("R")

TARGET_KEYS = ("stream", "path")


class MatchMode(str, Enum):
    """What counts as a match and what gets recorded."""
    BOOLEAN = "boolean"
    GROUPS = "groups"


@dataclass
class MatchRequest:
    """
    A single match target plus caller-supplied context.

    Exactly one of ``stream`` or ``path`` is set. Everything in ``context``
    is opaque and is handed back untouched on the result.
    """
    stream: Optional[Any] = None
    path: Optional[Path] = None
    context: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.stream is None and self.path is None:
            raise ValueError("MatchRequest needs either a stream or a path")
        if self.stream is not None and self.path is not None:
            raise ValueError("MatchRequest takes a stream or a path, not both")
        if self.path is not None and not isinstance(self.path, Path):
            self.path = Path(self.path)

    @property
    def target(self) -> str:
        """Human readable description of the target."""
        if self.path is not None:
            return str(self.path)
        return getattr(self.stream, "name", None) or repr(self.stream)

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> "MatchRequest":
        """
        Build a request from an open record such as ``{"path": p, "id": 3}``.

        The ``stream`` and ``path`` keys become the target; all other keys
        are carried along in ``context``.

        Args:
            record: Mapping holding a ``stream`` or ``path`` key

        Returns:
            MatchRequest for the record
        """
        context = {k: v for k, v in record.items() if k not in TARGET_KEYS}
        return cls(
            stream=record.get("stream"),
            path=record.get("path"),
            context=context,
        )


@dataclass
class MatchResult(Generic[R]):
    """
    Result of matching one request.

    ``result`` is a bool in boolean mode and a group mapping (or None when
    nothing matched) in capture-group mode.
    """
    stream: Optional[Any] = None
    path: Optional[Path] = None
    context: Dict[str, Any] = field(default_factory=dict)
    result: Optional[R] = None

    @classmethod
    def for_request(cls, request: MatchRequest, result: Optional[R]) -> "MatchResult[R]":
        return cls(
            stream=request.stream,
            path=request.path,
            context=request.context,
            result=result,
        )

    @property
    def matched(self) -> bool:
        return bool(self.result)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten back into the pass-through record shape."""
        record: Dict[str, Any] = dict(self.context)
        if self.stream is not None:
            record["stream"] = self.stream
        if self.path is not None:
            record["path"] = self.path
        record["result"] = self.result
        return record


RequestLike = Union[MatchRequest, Mapping[str, Any], str, Path, Any]
