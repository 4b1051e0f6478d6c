"""Search files command and handler."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional
import time

from ...api import capture_paths, match_paths
from ...domain.models import MatchMode, MatchResult, ReadOptions
from ...domain.services import compile_pattern
from ...infrastructure.discovery import PathFinder
from ...infrastructure.logging import StreambyterLogger


@dataclass
class SearchFilesCommand:
    """Command to match a pattern against a set of file targets."""
    pattern: str
    targets: List[str]
    mode: MatchMode = MatchMode.BOOLEAN
    read_options: ReadOptions = field(default_factory=ReadOptions)
    max_concurrency: Optional[int] = None


@dataclass
class SearchReport:
    """Outcome of a search over many files."""
    pattern: str
    mode: MatchMode
    results: List[MatchResult] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)
    duration_seconds: float = 0.0

    @property
    def files_searched(self) -> int:
        return len(self.results)

    @property
    def matched(self) -> List[MatchResult]:
        return [r for r in self.results if r.matched]


class SearchFilesHandler:
    """Expands targets and fans the match out over the files found."""

    def __init__(self, path_finder: PathFinder):
        self.path_finder = path_finder
        self.logger = StreambyterLogger.get_instance()

    async def handle(self, command: SearchFilesCommand) -> SearchReport:
        """
        Execute a search.

        Args:
            command: Search command

        Returns:
            SearchReport with one result per file, in sorted path order
        """
        # Compile before touching the filesystem so bad patterns fail fast
        pattern = compile_pattern(command.pattern)
        paths: List[Path] = self.path_finder.find(command.targets)

        self.logger.info(
            "Searching files",
            extra={"targets": len(paths), "mode": command.mode.value},
        )

        report = SearchReport(pattern=command.pattern, mode=command.mode)
        start = time.time()

        if command.mode == MatchMode.GROUPS:
            report.results = await capture_paths(
                paths, pattern, command.read_options, command.max_concurrency
            )
        else:
            report.results = await match_paths(
                paths, pattern, command.read_options, command.max_concurrency
            )

        report.duration_seconds = time.time() - start
        return report
