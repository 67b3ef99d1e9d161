"""
Bounded-concurrency execution for async pipeline steps.

Provides one reusable pattern: run a coroutine function across many items
with at most N in flight, collecting (item, result, error) tuples in input
order. Results are merged after collection, so workers never write to a
shared list.
"""

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from tqdm import tqdm

from name_radar.utils.stats import ExecutionStats

logger = logging.getLogger(__name__)

T = TypeVar("T")  # Input type
R = TypeVar("R")  # Result type


class BoundedExecutor:
    """
    Shared concurrency budget for one name's network work.

    Candidate probing, URL processing and record enrichment all go through
    the same executor so the total number of in-flight operations never
    exceeds max_workers.

    Args:
        max_workers: Maximum number of concurrently running coroutines
    """

    def __init__(self, max_workers: int):
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.max_workers = max_workers
        self._semaphore = asyncio.Semaphore(max_workers)

    async def submit(self, coro_func: Callable[..., Awaitable[R]], *args) -> R:
        """Run one coroutine function under the shared budget."""
        async with self._semaphore:
            return await coro_func(*args)

    async def map(
        self,
        items: Iterable[T],
        worker_func: Callable[[T], Awaitable[R]],
        desc: str = "Processing",
        unit: str = "item",
        show_progress: bool = False,
        error_handler: Callable[[T, Exception], None] | None = None,
        stats: ExecutionStats | None = None,
        stats_key: str | None = None,
    ) -> list[tuple[T, R | None, Exception | None]]:
        """
        Execute worker_func across items under the shared budget.

        Args:
            items: Iterable of items to process
            worker_func: Coroutine function called for each item
            desc: Progress bar description
            unit: Progress bar unit name
            show_progress: Whether to show a tqdm progress bar
            error_handler: Optional callback for errors (item, exception) -> None
            stats: Optional ExecutionStats instance for tracking
            stats_key: Optional key to increment in stats on success

        Returns:
            List of tuples (item, result, exception), in the same order as items
        """
        items_list = list(items)
        if not items_list:
            return []

        progress_bar = None
        if show_progress:
            progress_bar = tqdm(
                total=len(items_list),
                desc=desc,
                unit=unit,
                file=sys.stderr,
                ncols=100,
                mininterval=1.0,
                dynamic_ncols=True,
            )

        async def run_one(item: T) -> tuple[T, R | None, Exception | None]:
            result = None
            error = None
            try:
                result = await self.submit(worker_func, item)
                if stats and stats_key:
                    stats.increment(stats_key)
            except Exception as e:
                error = e
                if error_handler:
                    error_handler(item, e)
                else:
                    logger.debug(f"Error processing {item}: {e}")
                if stats:
                    stats.increment("failed")
            finally:
                if progress_bar:
                    progress_bar.update(1)
            return item, result, error

        try:
            return list(await asyncio.gather(*(run_one(item) for item in items_list)))
        finally:
            if progress_bar:
                progress_bar.close()
