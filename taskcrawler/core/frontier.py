"""
Crawl Frontier

Owns the seen-set for one discovery phase and admits each distinct absolute
URL to the task queue at most once.
"""

import logging
from typing import Awaitable, Callable, Optional, Set

from taskcrawler.core.base import Context, PageKind, WorkItem
from taskcrawler.core.scheduler import TaskQueue
from taskcrawler.utils.url import absolutize

PageHandler = Callable[[WorkItem], Awaitable[None]]


class Frontier:
    """
    Deduplicating entry point to the discovery queue
    """

    def __init__(self, queue: TaskQueue, handler: PageHandler, origin: str, seed_url: str):
        self.logger = logging.getLogger(__name__)
        self.queue = queue
        self.handler = handler
        self.origin = origin
        self.seed_url = seed_url
        self.seen: Set[str] = set()

    def absolutize(self, url: str, base: Optional[str] = None) -> str:
        """Resolve ``url`` against the origin, or ``base`` (default: the seed)"""
        return absolutize(url, self.origin, base or self.seed_url)

    def enqueue(self, url: str, kind: PageKind = PageKind.LISTING,
                context: Context = Context(), base: Optional[str] = None) -> bool:
        """
        Admit a page to the queue unless it has been admitted before

        Returns:
            True if a new work item was dispatched
        """
        absolute_url = self.absolutize(url, base)
        if absolute_url in self.seen:
            return False

        # No await between check and insert, so this cannot race
        self.seen.add(absolute_url)
        item = WorkItem(url=absolute_url, kind=kind, context=context)
        self.queue.add(lambda: self.handler(item))
        self.logger.debug(f"Enqueued {kind.value} page: {absolute_url}")
        return True

    async def drain(self) -> None:
        """Wait for the idle fixed point of the discovery queue"""
        await self.queue.on_idle()
