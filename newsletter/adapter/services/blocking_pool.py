"""
Dedicated pool for blocking, CPU-bound work.

Password hashing takes tens of milliseconds; running it on the event loop
would stall every other in-flight request.
"""

import asyncio
import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BlockingWorkPool:
    """Bounded thread pool kept apart from the default executor"""

    def __init__(self, max_workers: int):
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="blocking-work"
        )
        logger.info("Blocking work pool started with %s workers", max_workers)

    async def run(self, fn: Callable[..., T], *args: Any) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, functools.partial(fn, *args))

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)
