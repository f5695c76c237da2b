"""
Storage components for the Task Crawler

- Raw page archive
- JSON / CSV dataset output
"""

from .archiver import PageArchiver
from .dataset import DatasetWriter, RECORD_COLUMNS, JOB_COLUMNS

__all__ = ['PageArchiver', 'DatasetWriter', 'RECORD_COLUMNS', 'JOB_COLUMNS']
