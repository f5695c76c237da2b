"""
Tests for URL helpers: resolution, same-site checks and archive names
"""

import re

import pytest

from taskcrawler.utils.url import absolutize, archive_file_name, is_followable, is_same_site

ORIGIN = "https://learning.ua"
SEED = "https://learning.ua/matematyka/"


class TestAbsolutize:
    """absolutize() resolution rules"""

    def test_root_relative_matches_absolute(self):
        """Root-relative and absolute forms of one page are identical"""
        assert absolutize("/matematyka/x", ORIGIN, SEED) == absolutize(
            "https://learning.ua/matematyka/x", ORIGIN, SEED
        )
        assert absolutize("/matematyka/x", ORIGIN) == "https://learning.ua/matematyka/x"

    def test_absolute_kept_as_is(self):
        url = "https://other.example/page?a=1"
        assert absolutize(url, ORIGIN, SEED) == url

    def test_relative_resolves_against_current_page(self):
        """Relative hrefs use the page they were found on, not the seed"""
        page = "https://learning.ua/matematyka/5-klas/"
        assert absolutize("page/2/", ORIGIN, page) == "https://learning.ua/matematyka/5-klas/page/2/"
        assert absolutize("page/2/", ORIGIN, SEED) == "https://learning.ua/matematyka/page/2/"

    def test_relative_without_base_uses_origin(self):
        assert absolutize("about", ORIGIN) == "https://learning.ua/about"

    def test_protocol_relative(self):
        assert absolutize("//cdn.learning.ua/a.css", ORIGIN, SEED) == "https://cdn.learning.ua/a.css"


class TestLinkFilters:

    @pytest.mark.parametrize("href", ["", "   ", "#top", "mailto:a@b.c", "javascript:void(0)", "tel:123"])
    def test_not_followable(self, href):
        assert not is_followable(href)

    def test_followable(self):
        assert is_followable("/matematyka/")
        assert is_followable("page/2/")

    def test_same_site(self):
        assert is_same_site("https://learning.ua/x", ORIGIN)
        assert is_same_site("https://LEARNING.ua/x", ORIGIN)
        assert not is_same_site("https://evil.example/learning.ua", ORIGIN)


class TestArchiveFileName:

    def test_path_is_sanitized_and_collapsed(self):
        name = archive_file_name("https://learning.ua/matematyka/5-klas/a-1%20dodavannia/")
        assert name == "matematyka_5-klas_a-1_20dodavannia.html"

    def test_query_is_ignored(self):
        assert archive_file_name("https://learning.ua/a/b?x=1") == "a_b.html"

    def test_empty_path_falls_back(self):
        assert archive_file_name("https://learning.ua/") == "index.html"
        assert archive_file_name("https://learning.ua") == "index.html"

    def test_cyrillic_slugs_keep_distinct_names(self):
        first = archive_file_name("https://learning.ua/matematyka/додавання")
        second = archive_file_name("https://learning.ua/matematyka/віднімання")

        assert first != second
        assert first.startswith("matematyka_D0_B4_D0_BE_D0_B4")
        for name in (first, second):
            assert re.fullmatch(r'[a-zA-Z0-9_-]+\.html', name)
