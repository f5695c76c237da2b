"""
Core components for the Task Crawler

This package contains the core components including:
- Data model, base classes and errors
- Configuration management
- Logging system
- Page fetcher, task queue and crawl frontier

The orchestrator lives in ``taskcrawler.core.orchestrator`` and is imported
from there directly.
"""

from taskcrawler.core.base import (
    PageKind,
    Context,
    WorkItem,
    Record,
    JobPosting,
    BaseComponent,
    ScraperError,
    ConfigurationError,
    FetchError,
    ExtractionError,
    StorageError
)

from taskcrawler.core.config import (
    ConfigManager,
    CrawlerConfig,
    OutputConfig,
    ExtractionConfig,
    ListingConfig,
    LoggingConfig
)

from taskcrawler.core.logging import (
    LoggingManager,
    get_logger,
    setup_logging
)

from taskcrawler.core.fetcher import PageFetcher
from taskcrawler.core.scheduler import TaskQueue
from taskcrawler.core.frontier import Frontier

__all__ = [
    # Data model and errors
    'PageKind',
    'Context',
    'WorkItem',
    'Record',
    'JobPosting',
    'BaseComponent',
    'ScraperError',
    'ConfigurationError',
    'FetchError',
    'ExtractionError',
    'StorageError',

    # Configuration
    'ConfigManager',
    'CrawlerConfig',
    'OutputConfig',
    'ExtractionConfig',
    'ListingConfig',
    'LoggingConfig',

    # Logging
    'LoggingManager',
    'get_logger',
    'setup_logging',

    # Crawl machinery
    'PageFetcher',
    'TaskQueue',
    'Frontier'
]
