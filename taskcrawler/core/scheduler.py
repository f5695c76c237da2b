"""
Task Queue

Runs coroutine jobs with a concurrency cap and a global dispatch interval.
Jobs may add further jobs to the same queue; ``on_idle`` only resolves once
the outstanding-job counter is back at zero.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Optional, Set

Job = Callable[[], Awaitable[None]]


class TaskQueue:
    """
    Bounded, rate-limited queue of fire-and-forget jobs
    """

    def __init__(self, concurrency: int, interval: float = 0.0, name: str = "queue"):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        if interval < 0:
            raise ValueError("interval must be non-negative")

        self.logger = logging.getLogger(__name__)
        self.name = name
        self.concurrency = concurrency
        self.interval = interval

        self._semaphore: Optional[asyncio.Semaphore] = None
        self._throttle_lock: Optional[asyncio.Lock] = None
        self._idle: Optional[asyncio.Event] = None
        self._next_start = 0.0
        self._outstanding = 0
        self._tasks: Set[asyncio.Task] = set()

        self.stats: Dict[str, int] = {
            'added': 0,
            'completed': 0,
            'failed': 0
        }

    def _ensure_primitives(self) -> None:
        # Created lazily so they bind to the running loop
        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self.concurrency)
            self._throttle_lock = asyncio.Lock()
            self._idle = asyncio.Event()
            self._idle.set()

    @property
    def outstanding(self) -> int:
        """Jobs added but not yet finished"""
        return self._outstanding

    def add(self, job: Job) -> None:
        """
        Schedule a job

        The outstanding counter is incremented before this call returns, so a
        running job that adds children keeps the queue busy until they finish.
        """
        self._ensure_primitives()
        self._outstanding += 1
        self.stats['added'] += 1
        self._idle.clear()

        task = asyncio.get_running_loop().create_task(self._run(job))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, job: Job) -> None:
        try:
            async with self._semaphore:
                await self._throttle()
                await job()
            self.stats['completed'] += 1
        except Exception as e:
            self.stats['failed'] += 1
            self.logger.error(f"Unhandled error in {self.name} job: {e}", exc_info=True)
        finally:
            self._outstanding -= 1
            if self._outstanding == 0:
                self._idle.set()

    async def _throttle(self) -> None:
        """Space job starts at least ``interval`` seconds apart"""
        if not self.interval:
            return

        async with self._throttle_lock:
            loop = asyncio.get_running_loop()
            delay = self._next_start - loop.time()
            if delay > 0:
                await asyncio.sleep(delay)
            self._next_start = loop.time() + self.interval

    async def on_idle(self) -> None:
        """Wait until no job is queued or running"""
        self._ensure_primitives()
        await self._idle.wait()
