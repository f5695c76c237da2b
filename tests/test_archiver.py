"""
Tests for PageArchiver: stored files, paths and degradation on failure
"""

from pathlib import Path

import pytest

from taskcrawler.core.base import Record
from taskcrawler.storage.archiver import PageArchiver

from conftest import FakeFetcher


class TestPageArchiver:

    @pytest.fixture
    def records(self):
        return [
            Record(url="https://learning.ua/matematyka/a-1/", title="А.1 Перша", grade="5 клас"),
            Record(url="https://learning.ua/matematyka/a-2/", title="А.2 Друга", grade="5 клас"),
            Record(url="https://learning.ua/matematyka/a-3/", title="А.3 Третя", grade="5 клас"),
        ]

    @pytest.mark.asyncio
    async def test_archives_pages_and_degrades_failures(self, crawl_config, records, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        fetcher = FakeFetcher({
            records[0].url: "<html>one</html>",
            records[2].url: "<html>three</html>",
        })
        archive_dir = tmp_path / "data" / "html"
        archiver = PageArchiver(crawl_config, fetcher, archive_dir)

        results = await archiver.archive_all(records)

        assert [r.url for r in results] == [r.url for r in records]
        assert results[0].local_path == "data/html/matematyka_a-1.html"
        assert results[1].local_path is None
        assert results[2].local_path == "data/html/matematyka_a-3.html"
        assert (archive_dir / "matematyka_a-1.html").read_bytes() == b"<html>one</html>"
        assert not (archive_dir / "matematyka_a-2.html").exists()
        assert archiver.stats == {'archived': 2, 'failed': 1}

        # Everything except the archive path is untouched
        assert results[1].title == records[1].title
        assert results[1].grade == "5 клас"

    @pytest.mark.asyncio
    async def test_respects_concurrency(self, crawl_config, records, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        fetcher = FakeFetcher({r.url: "<html></html>" for r in records}, delay=0.01)
        crawl_config['crawler'].concurrency = 1
        archiver = PageArchiver(crawl_config, fetcher, tmp_path / "html")

        await archiver.archive_all(records)

        assert fetcher.max_active == 1
        assert sorted(fetcher.calls) == sorted(r.url for r in records)

    @pytest.mark.asyncio
    async def test_save_page_returns_relative_posix_path(self, crawl_config, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        archiver = PageArchiver(crawl_config, FakeFetcher({}), Path("out") / "html")
        await archiver.initialize()

        path = await archiver.save_page("https://learning.ua/", b"root")

        assert path == "out/html/index.html"
        assert (tmp_path / path).read_bytes() == b"root"
