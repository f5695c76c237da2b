"""
Logging System for the Task Crawler

Provides logging with file rotation and a console handler on stderr, plus a
summary report emitted at the end of each run.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Dict, Any


class LoggingManager:
    """
    Centralized logging manager with file rotation and run summaries
    """

    def __init__(self):
        self.logger: Optional[logging.Logger] = None
        self.file_handler: Optional[logging.handlers.RotatingFileHandler] = None
        self.console_handler: Optional[logging.StreamHandler] = None
        self._setup_complete = False

    def setup_logging(self, level: str = "INFO", log_file: str = "./logs/taskcrawler.log",
                      max_size: str = "10MB", backup_count: int = 3) -> None:
        """
        Set up logging system with file rotation and console output

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Path to log file
            max_size: Maximum size before rotation (e.g., "10MB")
            backup_count: Number of backup files to keep
        """
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        max_bytes = self._parse_size(max_size)

        # Module loggers live under this name and propagate here
        self.logger = logging.getLogger('taskcrawler')
        self.logger.setLevel(logging.DEBUG)
        self.logger.handlers.clear()

        detailed_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        console_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        )

        self.file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8'
        )
        self.file_handler.setLevel(logging.DEBUG)
        self.file_handler.setFormatter(detailed_formatter)
        self.logger.addHandler(self.file_handler)

        self.console_handler = logging.StreamHandler(sys.stderr)
        self.console_handler.setLevel(getattr(logging, level.upper()))
        self.console_handler.setFormatter(console_formatter)
        self.logger.addHandler(self.console_handler)

        self._setup_complete = True
        self.logger.info("Logging system initialized")

    def _parse_size(self, size_str: str) -> int:
        """Parse size string like '10MB' to bytes"""
        size_str = size_str.upper().strip()

        if size_str.endswith('KB'):
            return int(size_str[:-2]) * 1024
        elif size_str.endswith('MB'):
            return int(size_str[:-2]) * 1024 * 1024
        elif size_str.endswith('GB'):
            return int(size_str[:-2]) * 1024 * 1024 * 1024
        else:
            return int(size_str)

    def get_logger(self) -> logging.Logger:
        """Get the configured logger instance"""
        if not self._setup_complete or not self.logger:
            raise RuntimeError("Logging not set up. Call setup_logging() first.")
        return self.logger

    def generate_summary_report(self, stats: Dict[str, Any]) -> str:
        """Generate and log a summary of one crawl run"""
        report_lines = [
            "=" * 60,
            "CRAWL SESSION SUMMARY",
            "=" * 60,
            f"Mode: {stats.get('mode', 'Unknown')}",
            f"Duration: {stats.get('duration', 0.0):.1f}s",
            "",
            "DISCOVERY:",
            f"  Pages Dispatched: {stats.get('pages_dispatched', 0)}",
            f"  Pages Failed: {stats.get('pages_failed', 0)}",
            f"  Records Extracted: {stats.get('records_extracted', 0)}",
            f"  Unique Records: {stats.get('unique_records', 0)}",
            f"  Field Conflicts: {stats.get('conflicts', 0)}",
            "",
            "ARCHIVE:",
            f"  Pages Archived: {stats.get('archived', 0)}",
            f"  Archive Failures: {stats.get('archive_failures', 0)}",
        ]

        outputs = stats.get('outputs', [])
        if outputs:
            report_lines.extend(["", "OUTPUTS:"])
            for path in outputs:
                report_lines.append(f"  - {path}")

        report_lines.append("=" * 60)

        report = "\n".join(report_lines)
        if self.logger:
            self.logger.info(f"Session Summary:\n{report}")

        return report

    def close(self) -> None:
        """Close logging handlers"""
        if self.file_handler:
            self.file_handler.close()
        if self.console_handler:
            self.console_handler.close()


# Global logging manager instance
logging_manager = LoggingManager()


def get_logger() -> logging.Logger:
    """Get the global logger instance"""
    return logging_manager.get_logger()


def setup_logging(level: str = "INFO", log_file: str = "./logs/taskcrawler.log",
                  max_size: str = "10MB", backup_count: int = 3) -> None:
    """Set up global logging system"""
    logging_manager.setup_logging(level, log_file, max_size, backup_count)
