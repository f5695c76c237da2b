"""
Page Extraction Rules

Keyword- and regex-based classification of the anchors on a listing site.
Each rule is a plain predicate so it can be tested against literal markup;
PageExtractor applies them to a parsed page and never touches the network.
"""

import re
import logging
from typing import Iterator, List, Optional, Tuple

from bs4 import BeautifulSoup

from taskcrawler.core.base import Context, ExtractionError, Record
from taskcrawler.core.config import ExtractionConfig
from taskcrawler.utils.url import absolutize, is_followable, is_same_site

_WHITESPACE = re.compile(r'\s+')

# One label letter (Latin or Ukrainian Cyrillic), optional period, then a number
RECORD_LABEL_PATTERN = re.compile(r'^[A-ZА-ЯІЇЄҐ]\.?\s*\d+\b', re.IGNORECASE)


def normalize_text(text: Optional[str]) -> str:
    """Collapse whitespace runs and trim"""
    return _WHITESPACE.sub(' ', text or '').strip()


def _alternation(words: List[str]) -> re.Pattern:
    if not words:
        return re.compile(r'(?!)')
    return re.compile('|'.join(re.escape(word) for word in words), re.IGNORECASE)


def is_record_title(text: str) -> bool:
    """Whether anchor text starts with a task label such as "А.1" """
    return bool(RECORD_LABEL_PATTERN.match(text))


class PageExtractor:
    """
    Applies the configured link rules to one parsed page
    """

    def __init__(self, config: ExtractionConfig, origin: str, section_path: str):
        self.logger = logging.getLogger(__name__)
        self.origin = origin
        self.section_path = section_path
        self.heading_selector = config.heading_selector

        self.listing_cue_pattern = _alternation(config.listing_cues)
        self.grade_pattern = _alternation(config.grade_keywords)
        self.years_pattern = re.compile(config.years_pattern, re.IGNORECASE)
        self.pagination_label_pattern = _alternation(config.pagination_labels)
        self.page_segment_pattern = re.compile(config.page_segment_pattern, re.IGNORECASE)

    def parse(self, body: bytes) -> BeautifulSoup:
        """Parse raw page bytes"""
        try:
            return BeautifulSoup(body, 'html.parser')
        except Exception as e:
            raise ExtractionError(f"Failed to parse markup: {e}")

    # Predicates

    def is_in_section(self, url: str) -> bool:
        return is_same_site(url, self.origin) and self.section_path in url

    def is_grade_text(self, text: str) -> bool:
        return bool(self.grade_pattern.search(text))

    def is_listing_link(self, url: str, text: str) -> bool:
        """A category tile or "view all" link leading into the section"""
        if not self.is_in_section(url):
            return False
        return bool(
            self.listing_cue_pattern.search(text)
            or self.years_pattern.search(text)
            or self.is_grade_text(text)
        )

    def is_pagination_link(self, url: str, text: str) -> bool:
        """A page-number URL or a next/previous/page label inside the section"""
        if not self.is_in_section(url):
            return False
        return bool(
            self.page_segment_pattern.search(url)
            or self.pagination_label_pattern.search(text)
        )

    def is_record_link(self, url: str, text: str) -> bool:
        return is_same_site(url, self.origin) and is_record_title(text)

    # Scans

    def _anchors(self, soup: BeautifulSoup, page_url: str) -> Iterator[Tuple[str, str]]:
        """Yield (absolute url, normalized text) for every followable anchor"""
        for anchor in soup.find_all('a', href=True):
            href = anchor['href']
            if not is_followable(href):
                continue
            yield absolutize(href, self.origin, page_url), normalize_text(anchor.get_text())

    def derive_context(self, soup: BeautifulSoup) -> Context:
        """Read category/grade labels from the first heading-like element"""
        heading = soup.select_one(self.heading_selector)
        text = normalize_text(heading.get_text()) if heading else ''
        if not text:
            return Context()
        grade = text if self.is_grade_text(text) else None
        return Context(category=text, grade=grade)

    def extract_listing_links(self, soup: BeautifulSoup, page_url: str) -> List[str]:
        links = {}
        for url, text in self._anchors(soup, page_url):
            if self.is_listing_link(url, text):
                links[url] = None
        return list(links)

    def extract_pagination_links(self, soup: BeautifulSoup, page_url: str) -> List[str]:
        links = {}
        for url, text in self._anchors(soup, page_url):
            if self.is_pagination_link(url, text):
                links[url] = None
        return list(links)

    def extract_records(self, soup: BeautifulSoup, page_url: str, context: Context) -> List[Record]:
        records = []
        for url, text in self._anchors(soup, page_url):
            if text and self.is_record_link(url, text):
                records.append(Record(
                    url=url,
                    title=text,
                    category=context.category,
                    grade=context.grade
                ))
        self.logger.debug(f"Extracted {len(records)} records from {page_url}")
        return records
