"""
Dataset Writer

Persists the final rows as a pretty-printed JSON array and as a CSV table
with a fixed column order.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

from taskcrawler.core.base import StorageError

RECORD_COLUMNS = ('url', 'title', 'category', 'grade', 'localPath')
JOB_COLUMNS = ('title', 'company', 'location', 'salary', 'date', 'url')


class DatasetWriter:
    """Writes row dictionaries to JSON and CSV files"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def write_json(self, rows: List[Dict[str, Any]], path: Path) -> Path:
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(rows, f, ensure_ascii=False, indent=2)
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}")

        self.logger.info(f"Saved {len(rows)} rows to {path}")
        return path

    def write_csv(self, rows: List[Dict[str, Any]], path: Path, columns: Sequence[str]) -> Path:
        """Write rows with ``columns`` as header; None becomes an empty cell"""
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8', newline='') as f:
                writer = csv.DictWriter(f, fieldnames=list(columns), extrasaction='ignore')
                writer.writeheader()
                for row in rows:
                    writer.writerow({key: ('' if row.get(key) is None else row[key]) for key in columns})
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}")

        self.logger.info(f"Saved {len(rows)} rows to {path}")
        return path
