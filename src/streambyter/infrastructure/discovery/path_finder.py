"""Expansion of glob patterns and paths into match targets."""

import fnmatch
import glob
from pathlib import Path
from typing import Iterable, List, Optional

from ..logging import StreambyterLogger

GLOB_CHARS = set("*?[")


class PathFinder:
    """
    Turns command-line style targets into a list of files.

    Glob patterns (``**`` recurses) are expanded; directories are searched
    recursively. A plain path that does not exist is kept as is, so the
    missing file is reported by the matcher like any other open error.
    """

    def __init__(self, exclusions: Optional[Iterable[str]] = None):
        """
        Initialize the path finder.

        Args:
            exclusions: fnmatch patterns; matching files are skipped
        """
        self.exclusions = list(exclusions or [])
        self.logger = StreambyterLogger.get_instance()

    def find(self, patterns: Iterable[str]) -> List[Path]:
        """
        Expand targets into a sorted list of unique file paths.

        Args:
            patterns: Glob patterns, file paths or directories

        Returns:
            Sorted, de-duplicated file paths
        """
        found = set()

        for pattern in patterns:
            if self._is_glob(pattern):
                matches = [Path(p) for p in glob.glob(pattern, recursive=True)]
                if not matches:
                    self.logger.info(f"Pattern matched no files: {pattern}")
            else:
                path = Path(pattern)
                if path.is_dir():
                    matches = [p for p in path.rglob("*")]
                else:
                    matches = [path]

            for path in matches:
                if path.is_dir():
                    continue
                if self.is_excluded(path):
                    continue
                found.add(path)

        return sorted(found)

    def is_excluded(self, path: Path) -> bool:
        """Check a path against the exclusion patterns."""
        # Rooted so "*/.git/*" also matches a relative ".git/config"
        text = "/" + path.as_posix().lstrip("/")
        return any(fnmatch.fnmatch(text, pattern) for pattern in self.exclusions)

    @staticmethod
    def _is_glob(pattern: str) -> bool:
        return any(c in GLOB_CHARS for c in pattern)
