"""
Crawl Orchestrator

Coordinates the two crawl phases: discovery over the listing pages, then
archiving of every unique record, followed by writing the datasets. Also
runs the simpler single-page job listing scrape.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from taskcrawler.core.base import (
    BaseComponent,
    JobPosting,
    PageKind,
    Record,
    ScraperError,
    WorkItem
)
from taskcrawler.core.fetcher import PageFetcher
from taskcrawler.core.frontier import Frontier
from taskcrawler.core.logging import logging_manager
from taskcrawler.core.scheduler import TaskQueue
from taskcrawler.processors.aggregator import RecordAggregator
from taskcrawler.processors.extractor import PageExtractor
from taskcrawler.processors.job_listing import JobListingParser
from taskcrawler.storage.archiver import PageArchiver
from taskcrawler.storage.dataset import DatasetWriter, JOB_COLUMNS, RECORD_COLUMNS


@dataclass
class CrawlSummary:
    """Outcome of one crawl run"""
    records: List[Record]
    stats: Dict[str, Any] = field(default_factory=dict)


class CrawlOrchestrator(BaseComponent):
    """
    Runs discovery, deduplication, archiving and persistence in order
    """

    def __init__(self, config: Dict[str, Any], fetcher: Optional[PageFetcher] = None):
        super().__init__(config)
        self.logger = logging.getLogger(__name__)
        self.crawler_config = config['crawler']
        self.output_config = config['output']

        self.fetcher = fetcher or PageFetcher(
            config,
            user_agent=self.crawler_config.user_agent,
            timeout=self.crawler_config.timeout
        )
        self.extractor = PageExtractor(
            config['extraction'],
            origin=self.crawler_config.origin,
            section_path=self.crawler_config.section
        )
        self.archiver = PageArchiver(config, self.fetcher, self.output_config.archive_path)
        self.writer = DatasetWriter()

        self.aggregator: Optional[RecordAggregator] = None
        self.frontier: Optional[Frontier] = None
        self.pages_failed = 0

    async def initialize(self) -> None:
        await self.fetcher.initialize()
        await self.archiver.initialize()
        self._initialized = True

    async def cleanup(self) -> None:
        await self.fetcher.cleanup()
        await self.archiver.cleanup()

    async def discover(self) -> List[Record]:
        """
        Crawl from the seed until the queue is idle

        Returns:
            Every record stub extracted, in discovery order
        """
        queue = TaskQueue(
            self.crawler_config.concurrency,
            self.crawler_config.interval,
            name="discovery"
        )
        self.aggregator = RecordAggregator()
        self.frontier = Frontier(
            queue,
            self.process_page,
            origin=self.crawler_config.origin,
            seed_url=self.crawler_config.start_url
        )
        self.pages_failed = 0

        self.frontier.enqueue(self.crawler_config.start_url, PageKind.START)
        await self.frontier.drain()

        self.logger.info(
            f"Discovery finished: {len(self.frontier.seen)} pages, "
            f"{len(self.aggregator)} record stubs"
        )
        return self.aggregator.records

    async def process_page(self, item: WorkItem) -> None:
        """Fetch one page, collect its records and enqueue follow-up pages"""
        try:
            body = await self.fetcher.fetch(item.url)
            soup = self.extractor.parse(body)
        except ScraperError as e:
            self.pages_failed += 1
            self.logger.error(f"Failed: {item.url} {e}")
            return

        context = self.extractor.derive_context(soup).inherit(item.context)
        self.aggregator.add(self.extractor.extract_records(soup, item.url, context))

        if item.kind == PageKind.START:
            for link in self.extractor.extract_listing_links(soup, item.url):
                self.frontier.enqueue(link, PageKind.LISTING)

        for link in self.extractor.extract_pagination_links(soup, item.url):
            self.frontier.enqueue(link, PageKind.LISTING, context)

    async def run(self) -> CrawlSummary:
        """Full two-phase crawl followed by writing the datasets"""
        if not self._initialized:
            await self.initialize()

        start_time = time.time()
        self.logger.info(f"Starting crawl from {self.crawler_config.start_url}")

        await self.discover()
        unique = self.aggregator.deduplicate()
        records = await self.archiver.archive_all(unique)

        rows = [record.to_dict() for record in records]
        json_path = self.writer.write_json(rows, self.output_config.json_path)
        csv_path = self.writer.write_csv(rows, self.output_config.csv_path, RECORD_COLUMNS)

        stats = {
            'mode': 'crawl',
            'duration': time.time() - start_time,
            'pages_dispatched': len(self.frontier.seen),
            'pages_failed': self.pages_failed,
            'records_extracted': len(self.aggregator),
            'unique_records': len(unique),
            'conflicts': self.aggregator.conflicts,
            'archived': self.archiver.stats['archived'],
            'archive_failures': self.archiver.stats['failed'],
            'outputs': [str(json_path), str(csv_path), str(self.output_config.archive_path)]
        }
        logging_manager.generate_summary_report(stats)

        return CrawlSummary(records=records, stats=stats)


class ListingOrchestrator(BaseComponent):
    """
    Fetches one job listing page and writes its postings; no recursion
    """

    def __init__(self, config: Dict[str, Any], fetcher: Optional[PageFetcher] = None):
        super().__init__(config)
        self.logger = logging.getLogger(__name__)
        self.listing_config = config['listing']
        self.output_config = config['output']
        self.fetcher = fetcher or PageFetcher(
            config,
            user_agent=self.listing_config.user_agent,
            timeout=config['crawler'].timeout
        )
        self.parser = JobListingParser(self.listing_config.origin)
        self.writer = DatasetWriter()

    async def initialize(self) -> None:
        await self.fetcher.initialize()
        self._initialized = True

    async def cleanup(self) -> None:
        await self.fetcher.cleanup()

    async def run(self) -> List[JobPosting]:
        if not self._initialized:
            await self.initialize()

        # A failed fetch is fatal here: there is only one page
        body = await self.fetcher.fetch(self.listing_config.url)
        postings = self.parser.parse(body)

        rows = [posting.to_dict() for posting in postings]
        output_dir = self.output_config.json_path.parent
        self.writer.write_json(rows, output_dir / self.listing_config.json_name)
        self.writer.write_csv(rows, output_dir / self.listing_config.csv_name, JOB_COLUMNS)

        self.logger.info(f"Listing: saved {len(postings)} jobs from {self.listing_config.url}")
        return postings
