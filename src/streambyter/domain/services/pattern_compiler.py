"""Pattern compilation."""

import re
from typing import Pattern, Union

from ..exceptions import InvalidPatternError

PatternLike = Union[str, Pattern[str]]

# (?<name>...) as written in ECMAScript and .NET; lookbehinds (?<= and (?<! never
# match because a group name cannot start with = or !.
_NAMED_GROUP = re.compile(r"\(\?<([A-Za-z_]\w*)>")


def translate_named_groups(pattern: str) -> str:
    """
    Rewrite ``(?<name>...)`` groups into Python's ``(?P<name>...)`` form.

    Escaped characters and character classes are copied unchanged, so
    ``\\(?<x>`` and ``[(?<x>]`` are left alone.
    """
    out = []
    i = 0
    in_class = False

    while i < len(pattern):
        char = pattern[i]

        if char == "\\":
            out.append(pattern[i:i + 2])
            i += 2
            continue

        if in_class:
            if char == "]":
                in_class = False
        elif char == "[":
            in_class = True
            # "]" right after "[" or "[^" is a literal member
            end = i + 1
            if pattern.startswith("^", end):
                end += 1
            if pattern.startswith("]", end):
                end += 1
            out.append(pattern[i:end])
            i = end
            continue
        elif char == "(":
            group = _NAMED_GROUP.match(pattern, i)
            if group:
                out.append(f"(?P<{group.group(1)}>")
                i = group.end()
                continue

        out.append(char)
        i += 1

    return "".join(out)


def compile_pattern(pattern: PatternLike, flags: int = 0) -> Pattern[str]:
    """
    Compile a pattern for matching against decoded text.

    Args:
        pattern: Pattern string or an already compiled pattern
        flags: ``re`` flags applied when compiling a string

    Returns:
        Compiled pattern

    Raises:
        InvalidPatternError: If the pattern does not compile
    """
    if isinstance(pattern, re.Pattern):
        if isinstance(pattern.pattern, bytes):
            raise InvalidPatternError(repr(pattern.pattern), "bytes patterns are not supported")
        return pattern

    if not isinstance(pattern, str):
        raise InvalidPatternError(repr(pattern), "pattern must be a string")

    try:
        return re.compile(translate_named_groups(pattern), flags)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e
