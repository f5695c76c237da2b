"""
Command Line Argument Parsing for the Task Crawler

Handles command line arguments for mode selection, the configuration file
and overrides of the crawl settings.
"""

import argparse
from typing import List, Optional

from taskcrawler import __version__
from taskcrawler.core.config import ConfigManager


class CLIManager:
    """
    Command line interface manager for the crawler

    Parses and validates arguments and applies overrides onto a loaded
    ConfigManager.
    """

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all options

        Returns:
            Configured argument parser
        """
        parser = argparse.ArgumentParser(
            prog="taskcrawler",
            description="Crawl a paginated learning site into JSON/CSV task datasets",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter,
            epilog=self._get_epilog()
        )

        parser.add_argument(
            "--mode",
            choices=["crawl", "listing"],
            default="crawl",
            help="crawl: multi-page task crawl with archive; listing: single job listing page"
        )

        config_group = parser.add_argument_group("Configuration")
        config_group.add_argument(
            "--config",
            default="config/config.yaml",
            help="Path to configuration file (created with defaults if missing)"
        )
        config_group.add_argument(
            "--log-level",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Logging level"
        )

        crawl_group = parser.add_argument_group("Crawl Settings")
        crawl_group.add_argument(
            "--start-url",
            help="Seed URL for the crawl"
        )
        crawl_group.add_argument(
            "--origin",
            help="Site origin used to resolve root-relative links"
        )
        crawl_group.add_argument(
            "--section-path",
            help="Path prefix links must share to be followed (defaults to the start URL's path)"
        )
        crawl_group.add_argument(
            "--output-dir",
            help="Directory for datasets and archived pages"
        )
        crawl_group.add_argument(
            "--concurrency",
            type=int,
            help="Maximum number of pages fetched at once"
        )
        crawl_group.add_argument(
            "--interval-ms",
            type=int,
            help="Minimum milliseconds between request dispatches"
        )
        crawl_group.add_argument(
            "--timeout",
            type=int,
            help="Request timeout in seconds"
        )

        listing_group = parser.add_argument_group("Listing Mode")
        listing_group.add_argument(
            "--listing-url",
            help="Job listing page to scrape in listing mode"
        )

        parser.add_argument(
            "--version",
            action="version",
            version=f"Task Crawler v{__version__}"
        )

        parser.add_argument(
            "--examples",
            action="store_true",
            help="Show usage examples and exit"
        )

        return parser

    def _get_epilog(self) -> str:
        """
        Get epilog text for help message

        Returns:
            Formatted epilog text
        """
        return """
Examples:
  # Crawl with the settings in config/config.yaml
  python -m taskcrawler

  # Crawl another section politely
  python -m taskcrawler --start-url https://learning.ua/ukrainska-mova/ --concurrency 2 --interval-ms 1500

  # Write results elsewhere
  python -m taskcrawler --output-dir ./out

  # Scrape a single job listing page
  python -m taskcrawler --mode listing --listing-url "https://www.work.ua/jobs-kyiv-python/"

Notes:
  - Outputs land in <output-dir>/tasks.json, tasks.csv and html/
  - Failed pages are logged to stderr and do not change the exit status
"""

    def parse_arguments(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command line arguments

        Args:
            args: Command line arguments (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        parsed_args = self.parser.parse_args(args)
        self.validate_arguments(parsed_args)
        return parsed_args

    def validate_arguments(self, args: argparse.Namespace) -> bool:
        """
        Validate parsed arguments for consistency

        Raises:
            SystemExit: via parser.error if arguments are invalid
        """
        if args.concurrency is not None and args.concurrency <= 0:
            self.parser.error("Concurrency must be greater than 0")

        if args.interval_ms is not None and args.interval_ms < 0:
            self.parser.error("Interval must be non-negative")

        if args.timeout is not None and args.timeout <= 0:
            self.parser.error("Timeout must be greater than 0")

        return True

    def apply_overrides(self, args: argparse.Namespace, config_manager: ConfigManager) -> None:
        """Copy any command line overrides onto the loaded configuration"""
        crawler = config_manager.crawler_config

        if args.start_url:
            crawler.start_url = args.start_url
        if args.origin:
            crawler.origin = args.origin
        if args.section_path:
            crawler.section_path = args.section_path
        elif args.start_url:
            crawler.section_path = None
        if args.concurrency is not None:
            crawler.concurrency = args.concurrency
        if args.interval_ms is not None:
            crawler.interval_ms = args.interval_ms
        if args.timeout is not None:
            crawler.timeout = args.timeout
        if args.output_dir:
            config_manager.output_config.output_dir = args.output_dir
        if args.listing_url:
            config_manager.listing_config.url = args.listing_url

    def print_help(self) -> None:
        """Print help message"""
        self.parser.print_help()

    def get_usage_examples(self) -> str:
        return self._get_epilog()
