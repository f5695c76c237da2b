"""
Job Listing Parser

Reads job cards from a single job-board results page. Card markup varies, so
each field is taken from the first of several candidate selectors.
"""

import re
import logging
from typing import List

from bs4 import BeautifulSoup

from taskcrawler.core.base import JobPosting
from taskcrawler.processors.extractor import normalize_text
from taskcrawler.utils.url import absolutize

CARD_SELECTOR = '.card, .job-link'
TITLE_SELECTOR = 'h2, .add-top-xs a, a.job-link'
LINK_SELECTOR = 'h2 a, .add-top-xs a, a.job-link'
COMPANY_SELECTOR = ('.add-top-xs .strong-600, .mt-xs .strong-600, .company, '
                    '.add-top-xs a[rel="nofollow"]')
META_SELECTOR = '.mt-xs, .text-muted, .overflow'
SALARY_SELECTOR = '.salary, .text-success, .nowrap'
DATE_SELECTOR = '.text-muted:-soup-contains("тому"), time, .text-muted small'
FALLBACK_SELECTOR = '#pjax-job-list .job-link'

LOCATION_PATTERN = re.compile(r'Київ|Kyiv|Киев', re.IGNORECASE)


class JobListingParser:
    """Turns one listing page into job postings"""

    def __init__(self, origin: str):
        self.logger = logging.getLogger(__name__)
        self.origin = origin

    def _first_text(self, root, selector: str) -> str:
        element = root.select_one(selector)
        return normalize_text(element.get_text()) if element else ''

    def _resolve(self, link: str) -> str:
        return absolutize(link, self.origin) if link else ''

    def parse(self, html) -> List[JobPosting]:
        soup = BeautifulSoup(html, 'html.parser')
        postings = []

        for card in soup.select(CARD_SELECTOR):
            title = self._first_text(card, TITLE_SELECTOR)
            anchor = card.select_one(LINK_SELECTOR)
            link = self._resolve(anchor.get('href', '') if anchor else '')
            if not title and not link:
                continue

            meta = self._first_text(card, META_SELECTOR)
            location = LOCATION_PATTERN.search(meta)

            postings.append(JobPosting(
                title=title,
                company=self._first_text(card, COMPANY_SELECTOR),
                location=location.group(0) if location else '',
                salary=self._first_text(card, SALARY_SELECTOR),
                date=self._first_text(card, DATE_SELECTOR),
                url=link
            ))

        if not postings:
            for anchor in soup.select(FALLBACK_SELECTOR):
                title = normalize_text(anchor.get_text())
                link = self._resolve(anchor.get('href', ''))
                if title or link:
                    postings.append(JobPosting(title=title, company='', location='',
                                               salary='', date='', url=link))

        self.logger.info(f"Parsed {len(postings)} job postings")
        return postings
