"""Concurrent fan-out of single-target match operations."""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, TypeVar
import asyncio
import time

from ..logging import StreambyterLogger

T = TypeVar("T")
U = TypeVar("U")


@dataclass
class FanOutStats:
    """Statistics for the most recent fan-out run."""
    targets: int = 0
    matched: int = 0
    failed: bool = False
    duration_seconds: float = 0.0


class MatchFanOut:
    """
    Runs one operation per target concurrently and joins the results.

    Results come back in input order whatever the completion order. The
    join is all-or-nothing: the first failure cancels the remaining
    operations and propagates unchanged. Concurrency is unbounded unless
    ``max_concurrency`` is given, in which case a semaphore limits how
    many operations are in flight; with unbounded concurrency every target
    is started at once, so large path lists can exhaust file descriptors.
    """

    def __init__(self, max_concurrency: Optional[int] = None):
        """
        Initialize the fan-out.

        Args:
            max_concurrency: Maximum operations in flight (None = unbounded)
        """
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")
        self.max_concurrency = max_concurrency
        self.logger = StreambyterLogger.get_instance()
        self._stats = FanOutStats()

    async def run(
        self,
        targets: Sequence[T],
        operation: Callable[[T], Awaitable[U]],
    ) -> List[U]:
        """
        Apply ``operation`` to every target.

        Args:
            targets: Ordered targets
            operation: Coroutine function producing one result per target

        Returns:
            Results in the same order as ``targets``
        """
        self._stats = FanOutStats(targets=len(targets))
        if not targets:
            return []

        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None

        self.logger.info(
            "Starting fan-out",
            extra={
                "targets": len(targets),
                "max_concurrency": self.max_concurrency or "unbounded",
            }
        )

        start_time = time.time()

        async def run_one(target: T) -> U:
            if semaphore is None:
                return await operation(target)
            async with semaphore:
                return await operation(target)

        tasks = [asyncio.ensure_future(run_one(target)) for target in targets]

        try:
            results = await asyncio.gather(*tasks)
        except BaseException as e:
            self._stats.failed = True
            for task in tasks:
                if not task.done():
                    task.cancel()
            # Let cancelled siblings run their cleanup before propagating
            await asyncio.gather(*tasks, return_exceptions=True)
            if isinstance(e, Exception):
                self.logger.warning(
                    "Fan-out aborted",
                    extra={"error": f"{type(e).__name__}: {e}"}
                )
            raise

        self._stats.duration_seconds = time.time() - start_time
        self._stats.matched = sum(1 for r in results if getattr(r, "matched", False))

        self.logger.info(
            "Fan-out complete",
            extra={
                "targets": len(targets),
                "matched": self._stats.matched,
                "duration_seconds": round(self._stats.duration_seconds, 3),
            }
        )

        return list(results)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics for the most recent run.

        Returns:
            Dictionary with statistics
        """
        return {
            "targets": self._stats.targets,
            "matched": self._stats.matched,
            "failed": self._stats.failed,
            "duration_seconds": self._stats.duration_seconds,
        }
