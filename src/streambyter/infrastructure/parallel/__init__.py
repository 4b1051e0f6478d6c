"""Parallel fan-out infrastructure for matching many targets."""

from .fan_out import FanOutStats, MatchFanOut

__all__ = [
    "FanOutStats",
    "MatchFanOut",
]
