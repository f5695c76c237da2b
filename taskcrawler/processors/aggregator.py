"""
Record Aggregator

Collects record stubs from every visited page and collapses them to one
record per URL once discovery is idle.
"""

import logging
from typing import Dict, Iterable, List

from taskcrawler.core.base import Record


class RecordAggregator:
    """
    Insertion-ordered collection of extracted records
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.records: List[Record] = []
        self.conflicts = 0

    def add(self, records: Iterable[Record]) -> None:
        self.records.extend(records)

    def __len__(self) -> int:
        return len(self.records)

    def deduplicate(self) -> List[Record]:
        """
        One record per URL; the last occurrence wins, the first keeps its position

        A later stub whose category or grade differs from the earlier one is
        logged and counted in ``conflicts``.
        """
        unique: Dict[str, Record] = {}
        self.conflicts = 0

        for record in self.records:
            previous = unique.get(record.url)
            if previous and (previous.category, previous.grade) != (record.category, record.grade):
                self.conflicts += 1
                self.logger.warning(
                    f"Conflicting labels for {record.url}: "
                    f"{previous.category!r}/{previous.grade!r} replaced by "
                    f"{record.category!r}/{record.grade!r}"
                )
            unique[record.url] = record

        self.logger.info(f"Deduplicated {len(self.records)} records to {len(unique)}")
        return list(unique.values())
