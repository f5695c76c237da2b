"""
Tests for the page extraction rules

Each rule is exercised against literal markup; no network involved.
"""

import pytest

from taskcrawler.core.base import Context
from taskcrawler.processors.extractor import PageExtractor, is_record_title, normalize_text

ORIGIN = "https://learning.ua"
PAGE = "https://learning.ua/matematyka/5-klas/"


class TestRecordTitle:

    @pytest.mark.parametrize("text", [
        "А.1 Додавання дробів",   # Cyrillic А
        "A.1 Adding fractions",   # Latin A
        "б.12 Порівняння",
        "В3 Задачі",
        "Г. 4 Рівняння",
    ])
    def test_labelled_titles_match(self, text):
        assert is_record_title(text)

    @pytest.mark.parametrize("text", [
        "Підсумок",
        "5 клас",
        "А.Б Текст",
        "АБ.1 Подвійна мітка",
        "А.12x Не межа слова",
        "",
    ])
    def test_other_text_does_not_match(self, text):
        assert not is_record_title(text)

    def test_normalize_text(self):
        assert normalize_text("  А.1\n\t Додавання   дробів ") == "А.1 Додавання дробів"
        assert normalize_text(None) == ""


class TestPageExtractor:

    @pytest.fixture
    def extractor(self, extraction_config):
        return PageExtractor(extraction_config, origin=ORIGIN, section_path="/matematyka/")

    def soup(self, extractor, html):
        return extractor.parse(html.encode('utf-8'))

    def test_single_record_from_labelled_anchor(self, extractor):
        """A labelled same-site anchor yields exactly one record stub"""
        soup = self.soup(extractor, """
            <a href="/matematyka/5-klas/a-1/">
                А.1   Додавання
                дробів
            </a>
            <a href="/matematyka/5-klas/summary/">Підсумок</a>
        """)
        context = Context(category="5 клас", grade="5 клас")

        records = extractor.extract_records(soup, PAGE, context)

        assert len(records) == 1
        assert records[0].url == "https://learning.ua/matematyka/5-klas/a-1/"
        assert records[0].title == "А.1 Додавання дробів"
        assert records[0].grade == "5 клас"
        assert records[0].category == "5 клас"
        assert records[0].local_path is None

    def test_unlabelled_anchor_yields_no_record(self, extractor):
        soup = self.soup(extractor, '<a href="/matematyka/x/">Підсумок</a>')
        assert extractor.extract_records(soup, PAGE, Context()) == []

    def test_external_record_anchor_ignored(self, extractor):
        soup = self.soup(extractor, '<a href="https://other.example/a-1/">А.1 Чужий сайт</a>')
        assert extractor.extract_records(soup, PAGE, Context()) == []

    def test_relative_record_href_resolves_against_page(self, extractor):
        soup = self.soup(extractor, '<a href="a-2/">А.2 Віднімання</a>')
        records = extractor.extract_records(soup, PAGE, Context())
        assert records[0].url == "https://learning.ua/matematyka/5-klas/a-2/"

    def test_listing_links(self, extractor):
        """Listing cues, year counts and grade keywords all qualify inside the section"""
        soup = self.soup(extractor, """
            <a href="/matematyka/5-klas/">5 клас</a>
            <a href="/matematyka/dlia-ditei/">Для дітей 6 років</a>
            <a href="/matematyka/vsi/">Переглянути</a>
            <a href="/matematyka/5-klas/">5 КЛАС</a>
            <a href="/ukrainska-mova/5-klas/">5 клас</a>
            <a href="/matematyka/about/">Про нас</a>
            <a href="#">5 клас</a>
        """)

        links = extractor.extract_listing_links(soup, "https://learning.ua/matematyka/")

        assert links == [
            "https://learning.ua/matematyka/5-klas/",
            "https://learning.ua/matematyka/dlia-ditei/",
            "https://learning.ua/matematyka/vsi/",
        ]

    def test_pagination_links(self, extractor):
        soup = self.soup(extractor, """
            <a href="/matematyka/5-klas/page/2/">2</a>
            <a href="/matematyka/5-klas/?p=3">Наступна</a>
            <a href="/matematyka/5-klas/?p=1">попередня</a>
            <a href="/matematyka/5-klas/page/2/">Далі</a>
            <a href="/blog/page/2/">2</a>
            <a href="/matematyka/5-klas/a-1/">А.1 Задача</a>
        """)

        links = extractor.extract_pagination_links(soup, PAGE)

        assert links == [
            "https://learning.ua/matematyka/5-klas/page/2/",
            "https://learning.ua/matematyka/5-klas/?p=3",
            "https://learning.ua/matematyka/5-klas/?p=1",
        ]

    def test_context_with_grade(self, extractor):
        soup = self.soup(extractor, "<h1>  5   клас </h1><h1>Інше</h1>")
        assert extractor.derive_context(soup) == Context(category="5 клас", grade="5 клас")

    def test_context_without_grade(self, extractor):
        soup = self.soup(extractor, '<div class="page-title">Математика</div>')
        assert extractor.derive_context(soup) == Context(category="Математика", grade=None)

    def test_context_without_heading(self, extractor):
        soup = self.soup(extractor, "<p>Нічого</p>")
        assert extractor.derive_context(soup) == Context()

    def test_context_inherits_missing_fields(self):
        parent = Context(category="Математика", grade="5 клас")
        assert Context(category="Дроби").inherit(parent) == Context(category="Дроби", grade="5 клас")
        assert Context().inherit(parent) == parent
