#!/usr/bin/env python3
"""
Task Crawler - Main Entry Point

Loads the configuration, sets up logging and runs either the multi-page
crawl or the single-page listing scrape.
"""

import sys
import asyncio
from typing import List, Optional

from taskcrawler.cli.arguments import CLIManager
from taskcrawler.core.config import ConfigManager
from taskcrawler.core.logging import setup_logging, get_logger
from taskcrawler.core.orchestrator import CrawlOrchestrator, ListingOrchestrator


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the crawler"""
    cli_manager = CLIManager()
    args = cli_manager.parse_arguments(argv)

    if args.examples:
        print("\nTask Crawler - Usage Examples\n")
        print(cli_manager.get_usage_examples())
        return 0

    config_manager = ConfigManager(args.config)
    try:
        config_manager.load_config()
    except Exception as e:
        print(f"Failed to load configuration: {e}", file=sys.stderr)
        return 1

    logging_config = config_manager.logging_config
    setup_logging(
        level=args.log_level or logging_config.level,
        log_file=logging_config.file,
        max_size=logging_config.max_size,
        backup_count=logging_config.backup_count
    )
    logger = get_logger()

    cli_manager.apply_overrides(args, config_manager)

    try:
        config_manager.validate_config()
    except Exception as e:
        logger.error(f"Configuration validation failed: {e}")
        return 1

    config = config_manager.as_component_config()
    orchestrator = None
    try:
        if args.mode == "listing":
            orchestrator = ListingOrchestrator(config)
        else:
            orchestrator = CrawlOrchestrator(config)
        await orchestrator.initialize()
        await orchestrator.run()
    except Exception as e:
        logger.error(f"Crawler run failed: {e}", exc_info=True)
        return 1
    finally:
        if orchestrator is not None:
            await orchestrator.cleanup()

    return 0


def run() -> None:
    """Console script wrapper"""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nCrawler interrupted by user", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    run()
