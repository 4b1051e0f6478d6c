"""Domain exceptions for streambyter."""


class StreambyterError(Exception):
    """Base class for errors raised by streambyter itself.

    Stream and file errors are never wrapped in this type: they reach the
    caller exactly as the underlying source raised them.
    """


class InvalidPatternError(StreambyterError, ValueError):
    """Raised when a pattern cannot be compiled."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class ConfigurationError(StreambyterError):
    """Raised when configuration cannot be loaded or validated."""
