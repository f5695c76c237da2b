"""
Command Line Interface for the Task Crawler

Handles mode selection, configuration file selection and overrides of the
crawl settings.

Classes:
    CLIManager: Command line interface manager for the crawler
"""

from taskcrawler.cli.arguments import CLIManager

__all__ = ['CLIManager']
