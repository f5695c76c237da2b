"""
Page Archiver

Second crawl pass: fetch every unique record's page, store the raw bytes
under the archive directory and attach the stored path to the record.
"""

import os
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List

import aiofiles

from taskcrawler.core.base import BaseComponent, Record, ScraperError, StorageError
from taskcrawler.core.fetcher import PageFetcher
from taskcrawler.core.scheduler import TaskQueue
from taskcrawler.utils.url import archive_file_name


class PageArchiver(BaseComponent):
    """
    Archives record pages under the same concurrency and rate caps as discovery
    """

    def __init__(self, config: Dict[str, Any], fetcher: PageFetcher, archive_dir: Path):
        super().__init__(config)
        self.logger = logging.getLogger(__name__)
        self.fetcher = fetcher
        self.archive_dir = Path(archive_dir)
        self.crawler_config = config['crawler']
        self.stats = {
            'archived': 0,
            'failed': 0
        }

    async def initialize(self) -> None:
        self.archive_dir.mkdir(parents=True, exist_ok=True)
        self._initialized = True

    async def cleanup(self) -> None:
        pass

    async def archive_all(self, records: List[Record]) -> List[Record]:
        """
        Archive every record; failures degrade a record but never drop it

        Returns:
            Records in input order, each with ``local_path`` set or None
        """
        if not self._initialized:
            await self.initialize()

        queue = TaskQueue(
            self.crawler_config.concurrency,
            self.crawler_config.interval,
            name="archive"
        )
        results: List[Record] = list(records)

        for index, record in enumerate(records):
            queue.add(lambda index=index, record=record: self._archive_one(index, record, results))

        await queue.on_idle()
        self.logger.info(
            f"Archived {self.stats['archived']}/{len(records)} pages "
            f"({self.stats['failed']} failed)"
        )
        return results

    async def _archive_one(self, index: int, record: Record, results: List[Record]) -> None:
        try:
            body = await self.fetcher.fetch(record.url)
            path = await self.save_page(record.url, body)
        except ScraperError as e:
            self.stats['failed'] += 1
            self.logger.error(f"Failed to archive {record.url}: {e}")
            results[index] = replace(record, local_path=None)
            return

        self.stats['archived'] += 1
        results[index] = replace(record, local_path=path)

    async def save_page(self, url: str, body: bytes) -> str:
        """Write raw bytes to the archive and return the path relative to the cwd"""
        file_path = self.archive_dir / archive_file_name(url)
        try:
            async with aiofiles.open(file_path, 'wb') as f:
                await f.write(body)
        except OSError as e:
            raise StorageError(f"Cannot write {file_path}: {e}")

        self.logger.debug(f"Saved {url} to {file_path}")
        return Path(os.path.relpath(file_path, Path.cwd())).as_posix()
