"""
Processing components for the Task Crawler

- Link, record and pagination extraction rules
- Record aggregation and deduplication
- Single-page job listing parsing
"""

from .extractor import PageExtractor, normalize_text, is_record_title
from .aggregator import RecordAggregator
from .job_listing import JobListingParser

__all__ = ['PageExtractor', 'normalize_text', 'is_record_title',
           'RecordAggregator', 'JobListingParser']
