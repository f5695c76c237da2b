"""
Page Fetcher

Single-attempt HTTP GET over a shared aiohttp session. Any network error,
timeout or status outside [200, 400) surfaces as a FetchError; retrying is
left to the caller.
"""

import asyncio
import logging
import time
from typing import Dict, Any, Optional

import aiohttp

from taskcrawler.core.base import BaseComponent, FetchError


class PageFetcher(BaseComponent):
    """
    Fetches raw page bodies with a fixed timeout and client identity
    """

    ACCEPTED_STATUS = range(200, 400)

    def __init__(self, config: Dict[str, Any], user_agent: str, timeout: float = 20):
        super().__init__(config)
        self.logger = logging.getLogger(__name__)
        self.user_agent = user_agent
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

        self.stats = {
            'total_fetched': 0,
            'successful_fetches': 0,
            'failed_fetches': 0,
            'total_time': 0.0
        }

    async def initialize(self) -> None:
        """Open the HTTP session"""
        if self._initialized:
            return

        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            headers={'User-Agent': self.user_agent}
        )
        self._initialized = True
        self.logger.debug(f"Page fetcher initialized (timeout={self.timeout}s)")

    async def cleanup(self) -> None:
        """Close the HTTP session"""
        if self.session:
            await self.session.close()
            self.session = None
        self._initialized = False

    async def fetch(self, url: str) -> bytes:
        """
        Fetch a page body

        Args:
            url: Absolute URL to fetch

        Returns:
            Raw response body

        Raises:
            FetchError: on network error, timeout or unaccepted status
        """
        if not self.session:
            await self.initialize()

        start_time = time.time()
        self.stats['total_fetched'] += 1

        try:
            async with self.session.get(url) as response:
                if response.status not in self.ACCEPTED_STATUS:
                    raise FetchError(url, f"HTTP {response.status}")
                body = await response.read()
        except FetchError:
            self.stats['failed_fetches'] += 1
            raise
        except asyncio.TimeoutError:
            self.stats['failed_fetches'] += 1
            raise FetchError(url, f"timed out after {self.timeout}s")
        except aiohttp.ClientError as e:
            self.stats['failed_fetches'] += 1
            raise FetchError(url, e)
        finally:
            self.stats['total_time'] += time.time() - start_time

        self.stats['successful_fetches'] += 1
        self.logger.debug(f"Fetched {url} ({len(body)} bytes)")
        return body

    def get_stats(self) -> Dict[str, Any]:
        """Get fetch statistics"""
        return {
            **self.stats,
            'success_rate': (
                self.stats['successful_fetches'] / max(self.stats['total_fetched'], 1)
            ) * 100
        }
