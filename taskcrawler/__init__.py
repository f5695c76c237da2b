"""
Task Crawler

Crawls a paginated learning site, discovers category and task pages through
heuristic link matching, archives each task page and writes deduplicated
JSON/CSV datasets.

Features:
- Two-phase crawl (discovery, then archiving) over one bounded, rate-limited queue design
- URL deduplication with a stable idle fixed point for self-feeding queues
- Declarative link/record classification rules configurable via YAML
- Partial-failure tolerance: failed pages and archives are logged, never fatal
- Single-page job listing mode
"""

__version__ = "0.1.0"
