"""Stream read options."""

from dataclasses import dataclass
from typing import Any

DEFAULT_CHUNK_SIZE = 512


@dataclass(frozen=True)
class ReadOptions:
    """Options that influence how a path is opened and read."""
    chunk_size: int = DEFAULT_CHUNK_SIZE
    encoding: str = "utf-8"
    errors: str = "replace"

    def __post_init__(self):
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")

    @classmethod
    def from_config(cls, reader_config: Any) -> "ReadOptions":
        """Build options from a ``ReaderConfig`` model."""
        return cls(
            chunk_size=reader_config.chunk_size,
            encoding=reader_config.encoding,
            errors=reader_config.errors,
        )
