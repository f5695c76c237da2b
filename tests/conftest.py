"""
Shared fixtures for the crawler test suite
"""

import asyncio
from typing import Dict, List

import pytest

from taskcrawler.core.base import FetchError
from taskcrawler.core.config import CrawlerConfig, ExtractionConfig, ListingConfig, OutputConfig

ORIGIN = "https://learning.ua"
SEED = "https://learning.ua/matematyka/"


class FakeFetcher:
    """In-memory stand-in for PageFetcher; unknown URLs fail like a dead host"""

    def __init__(self, pages: Dict[str, str], delay: float = 0.0):
        self.pages = pages
        self.delay = delay
        self.calls: List[str] = []
        self.active = 0
        self.max_active = 0

    async def initialize(self) -> None:
        pass

    async def cleanup(self) -> None:
        pass

    async def fetch(self, url: str) -> bytes:
        self.calls.append(url)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self.delay)
            if url not in self.pages:
                raise FetchError(url, "HTTP 404")
            return self.pages[url].encode('utf-8')
        finally:
            self.active -= 1


@pytest.fixture
def crawl_config(tmp_path):
    """Component config with no dispatch delay and output under tmp_path"""
    return {
        'crawler': CrawlerConfig(start_url=SEED, origin=ORIGIN, concurrency=2, interval_ms=0),
        'output': OutputConfig(output_dir=str(tmp_path / "data")),
        'extraction': ExtractionConfig(),
        'listing': ListingConfig()
    }


@pytest.fixture
def extraction_config():
    return ExtractionConfig()
