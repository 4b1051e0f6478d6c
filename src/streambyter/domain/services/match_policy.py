"""Match policies: what counts as a match and what gets recorded."""

from abc import ABC, abstractmethod
from typing import Generic, Optional, Pattern, TypeVar

from ..models.match import GroupMapping, MatchMode

R = TypeVar("R")


class MatchPolicy(ABC, Generic[R]):
    """
    Decides whether the accumulated buffer holds a match.

    ``evaluate`` returns the value to record, or None while no match has
    been found yet. Policies are stateless and can be shared between
    concurrent matches of the same pattern.
    """

    mode: MatchMode

    def __init__(self, pattern: Pattern[str]):
        self.pattern = pattern

    @property
    @abstractmethod
    def default(self) -> Optional[R]:
        """Value reported when the stream ends without a match."""
        pass

    @abstractmethod
    def evaluate(self, buffer: str) -> Optional[R]:
        """Evaluate the pattern against the whole buffer."""
        pass


class BooleanPolicy(MatchPolicy[bool]):
    """Records True as soon as the pattern is found anywhere in the buffer."""

    mode = MatchMode.BOOLEAN

    @property
    def default(self) -> bool:
        return False

    def evaluate(self, buffer: str) -> Optional[bool]:
        if self.pattern.search(buffer) is not None:
            return True
        return None


class GroupPolicy(MatchPolicy[GroupMapping]):
    """
    Records the named groups of the first match.

    A match that yields no named groups does not count; the caller keeps
    consuming the stream.
    """

    mode = MatchMode.GROUPS

    @property
    def default(self) -> Optional[GroupMapping]:
        return None

    def evaluate(self, buffer: str) -> Optional[GroupMapping]:
        match = self.pattern.search(buffer)
        if match is None:
            return None
        groups = match.groupdict()
        return groups or None


def policy_for(mode: MatchMode, pattern: Pattern[str]) -> MatchPolicy:
    """Create the policy for a match mode."""
    if mode == MatchMode.BOOLEAN:
        return BooleanPolicy(pattern)
    return GroupPolicy(pattern)
