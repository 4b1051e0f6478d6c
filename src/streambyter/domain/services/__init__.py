"""Domain services for streambyter."""

from .match_policy import BooleanPolicy, GroupPolicy, MatchPolicy, policy_for
from .pattern_compiler import PatternLike, compile_pattern, translate_named_groups

__all__ = [
    "BooleanPolicy",
    "GroupPolicy",
    "MatchPolicy",
    "policy_for",
    "PatternLike",
    "compile_pattern",
    "translate_named_groups",
]
