"""
Tests for DatasetWriter JSON and CSV output
"""

import csv
import json

from taskcrawler.core.base import Record
from taskcrawler.storage.dataset import DatasetWriter, RECORD_COLUMNS


class TestDatasetWriter:

    def rows(self):
        return [
            Record(url="https://learning.ua/a", title="А.1 Перша", category="5 клас",
                   grade="5 клас", local_path="data/html/a.html").to_dict(),
            Record(url="https://learning.ua/b", title="А.2 Друга, з комою").to_dict(),
        ]

    def test_json_keeps_null_archive_path(self, tmp_path):
        path = DatasetWriter().write_json(self.rows(), tmp_path / "tasks.json")

        data = json.loads(path.read_text(encoding='utf-8'))

        assert len(data) == 2
        assert data[0]['localPath'] == "data/html/a.html"
        assert 'localPath' in data[1] and data[1]['localPath'] is None
        assert "А.1 Перша" in path.read_text(encoding='utf-8')

    def test_csv_header_and_rows(self, tmp_path):
        path = DatasetWriter().write_csv(self.rows(), tmp_path / "out" / "tasks.csv", RECORD_COLUMNS)

        with open(path, encoding='utf-8', newline='') as f:
            rows = list(csv.reader(f))

        assert rows[0] == ['url', 'title', 'category', 'grade', 'localPath']
        assert len(rows) == 3
        assert rows[2] == ['https://learning.ua/b', 'А.2 Друга, з комою', '', '', '']

    def test_empty_dataset(self, tmp_path):
        writer = DatasetWriter()
        writer.write_json([], tmp_path / "tasks.json")
        writer.write_csv([], tmp_path / "tasks.csv", RECORD_COLUMNS)

        assert json.loads((tmp_path / "tasks.json").read_text(encoding='utf-8')) == []
        assert (tmp_path / "tasks.csv").read_text(encoding='utf-8').strip() == "url,title,category,grade,localPath"
