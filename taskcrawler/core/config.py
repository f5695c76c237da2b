"""
Configuration Manager for the Task Crawler

Handles YAML/JSON configuration files and environment variable integration
with validation of the seed, output and throttling settings.
"""

import os
import re
import json
import yaml
import validators
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field, asdict
from pathlib import Path
from urllib.parse import urlparse

from taskcrawler.core.base import ConfigurationError


@dataclass
class CrawlerConfig:
    """Seed and throttling configuration for the multi-page crawl"""
    start_url: str = "https://learning.ua/matematyka/"
    origin: str = "https://learning.ua"
    section_path: Optional[str] = None
    concurrency: int = 3
    interval_ms: int = 800
    timeout: int = 20
    user_agent: str = "learning-ua-crawler/1.0 (+github.com)"

    @property
    def interval(self) -> float:
        """Minimum gap between dispatches, in seconds"""
        return self.interval_ms / 1000.0

    @property
    def section(self) -> str:
        """Path prefix that keeps the crawl in one section, defaulting to the seed's path"""
        return self.section_path or urlparse(self.start_url).path or "/"


@dataclass
class OutputConfig:
    """Where datasets and archived pages are written"""
    output_dir: str = "data"
    json_name: str = "tasks.json"
    csv_name: str = "tasks.csv"
    html_dir: str = "html"

    @property
    def json_path(self) -> Path:
        return Path(self.output_dir) / self.json_name

    @property
    def csv_path(self) -> Path:
        return Path(self.output_dir) / self.csv_name

    @property
    def archive_path(self) -> Path:
        return Path(self.output_dir) / self.html_dir


@dataclass
class ExtractionConfig:
    """Keyword and pattern sets used to classify links on a page"""
    heading_selector: str = "h1, .page-title, .title"
    listing_cues: List[str] = field(default_factory=lambda: ["Переглянути"])
    grade_keywords: List[str] = field(default_factory=lambda: ["клас"])
    years_pattern: str = r"\d+\s*рок"
    pagination_labels: List[str] = field(default_factory=lambda: [
        "Наступна", "Попередня", "Далі", "Сторінка"
    ])
    page_segment_pattern: str = r"page/"


@dataclass
class ListingConfig:
    """Single-page job listing settings"""
    url: str = "https://www.work.ua/jobs-kyiv-team+leader/?page=2"
    origin: str = "https://www.work.ua"
    json_name: str = "workua.json"
    csv_name: str = "workua.csv"
    user_agent: str = "workua-parser/1.0 (+github.com)"


@dataclass
class LoggingConfig:
    """Logging system configuration"""
    level: str = "INFO"
    file: str = "./logs/taskcrawler.log"
    max_size: str = "10MB"
    backup_count: int = 3


class ConfigManager:
    """
    Centralized configuration manager with support for YAML/JSON files
    and environment variable integration.
    """

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or "config/config.yaml"
        self._config_data: Dict[str, Any] = {}
        self.crawler_config: Optional[CrawlerConfig] = None
        self.output_config: Optional[OutputConfig] = None
        self.extraction_config: Optional[ExtractionConfig] = None
        self.listing_config: Optional[ListingConfig] = None
        self.logging_config: Optional[LoggingConfig] = None

    def load_config(self, config_path: Optional[str] = None) -> Dict[str, Any]:
        """Load configuration from file with environment variable override"""
        if config_path:
            self.config_path = config_path

        config_file = Path(self.config_path)

        if not config_file.exists():
            self._config_data = self._get_default_config()
            self._create_default_config_file()
        else:
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    if config_file.suffix.lower() == '.json':
                        self._config_data = json.load(f)
                    else:
                        self._config_data = yaml.safe_load(f) or {}
            except Exception as e:
                raise ConfigurationError(f"Failed to load config from {config_file}: {e}")

        self._apply_env_overrides()
        self._parse_config()

        return self._config_data

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration dictionary"""
        return {
            'crawler': asdict(CrawlerConfig()),
            'output': asdict(OutputConfig()),
            'extraction': asdict(ExtractionConfig()),
            'listing': asdict(ListingConfig()),
            'logging': asdict(LoggingConfig())
        }

    def _create_default_config_file(self) -> None:
        """Create default configuration file"""
        config_dir = Path(self.config_path).parent
        config_dir.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(self._config_data, f, default_flow_style=False,
                           indent=2, allow_unicode=True)

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides"""
        crawler = self._config_data.setdefault('crawler', {})

        if os.getenv('CRAWLER_START_URL'):
            crawler['start_url'] = os.getenv('CRAWLER_START_URL')

        if os.getenv('CRAWLER_ORIGIN'):
            crawler['origin'] = os.getenv('CRAWLER_ORIGIN')

        if os.getenv('CRAWLER_SECTION_PATH'):
            crawler['section_path'] = os.getenv('CRAWLER_SECTION_PATH')

        if os.getenv('CRAWLER_OUTPUT_DIR'):
            self._config_data.setdefault('output', {})['output_dir'] = os.getenv('CRAWLER_OUTPUT_DIR')

        for env_name, key in (('CRAWLER_CONCURRENCY', 'concurrency'),
                              ('CRAWLER_INTERVAL_MS', 'interval_ms')):
            if os.getenv(env_name):
                try:
                    crawler[key] = int(os.getenv(env_name))
                except ValueError:
                    pass

        if os.getenv('LOG_LEVEL'):
            self._config_data.setdefault('logging', {})['level'] = os.getenv('LOG_LEVEL')

    def _parse_config(self) -> None:
        """Parse configuration into dataclass objects"""
        try:
            self.crawler_config = CrawlerConfig(**(self._config_data.get('crawler') or {}))
            self.output_config = OutputConfig(**(self._config_data.get('output') or {}))
            self.extraction_config = ExtractionConfig(**(self._config_data.get('extraction') or {}))
            self.listing_config = ListingConfig(**(self._config_data.get('listing') or {}))
            self.logging_config = LoggingConfig(**(self._config_data.get('logging') or {}))
        except TypeError as e:
            raise ConfigurationError(f"Unknown configuration key: {e}")

    def validate_config(self) -> bool:
        """Validate the crawl settings and prepare output directories"""
        if not self.crawler_config:
            raise ConfigurationError("Configuration not loaded")

        crawler = self.crawler_config
        for name in ('start_url', 'origin'):
            value = getattr(crawler, name)
            if not validators.url(value) or urlparse(value).scheme not in ('http', 'https'):
                raise ConfigurationError(f"Invalid {name}: {value}")

        if urlparse(crawler.start_url).netloc != urlparse(crawler.origin).netloc:
            raise ConfigurationError(
                f"Start URL {crawler.start_url} is not on origin {crawler.origin}"
            )

        if not (urlparse(crawler.start_url).path or "/").startswith(crawler.section):
            raise ConfigurationError(
                f"Start URL {crawler.start_url} is outside section {crawler.section}"
            )

        if crawler.concurrency < 1:
            raise ConfigurationError("Concurrency must be at least 1")

        if crawler.interval_ms < 0:
            raise ConfigurationError("Interval must be non-negative")

        if crawler.timeout <= 0:
            raise ConfigurationError("Timeout must be greater than 0")

        for name in ('years_pattern', 'page_segment_pattern'):
            try:
                re.compile(getattr(self.extraction_config, name))
            except re.error as e:
                raise ConfigurationError(f"Invalid {name}: {e}")

        try:
            self.output_config.archive_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(f"Cannot create output directory {self.output_config.output_dir}: {e}")

        return True

    def as_component_config(self) -> Dict[str, Any]:
        """Flatten the parsed sections into the dict handed to components"""
        if not self.crawler_config:
            raise ConfigurationError("Configuration not loaded")

        return {
            'crawler': self.crawler_config,
            'output': self.output_config,
            'extraction': self.extraction_config,
            'listing': self.listing_config
        }
