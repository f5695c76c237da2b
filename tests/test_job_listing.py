"""
Tests for the single-page job listing parser
"""

import pytest

from taskcrawler.core.base import JobPosting
from taskcrawler.processors.job_listing import JobListingParser


class TestJobListingParser:

    @pytest.fixture
    def parser(self):
        return JobListingParser("https://www.work.ua")

    def test_parses_cards(self, parser):
        html = """
        <div id="pjax-job-list">
          <div class="card">
            <h2><a href="/jobs/1/">  Team   Leader </a></h2>
            <div class="add-top-xs"><span class="strong-600">Acme</span></div>
            <div class="mt-xs">Kyiv, remote</div>
            <span class="salary">50 000 грн</span>
            <span class="text-muted">2 дні тому</span>
          </div>
          <div class="card">
            <h2><a href="https://www.work.ua/jobs/2/">QA Lead</a></h2>
          </div>
          <div class="card"><p>advert</p></div>
        </div>
        """

        postings = parser.parse(html)

        assert postings == [
            JobPosting(title="Team Leader", company="Acme", location="Kyiv",
                       salary="50 000 грн", date="2 дні тому", url="https://www.work.ua/jobs/1/"),
            JobPosting(title="QA Lead", company="", location="", salary="", date="",
                       url="https://www.work.ua/jobs/2/"),
        ]

    def test_fallback_anchor_list(self, parser):
        html = """
        <div id="pjax-job-list">
          <span class="job-link"></span>
          <a class="job-link" href="/jobs/3/">Backend Lead</a>
        </div>
        """
        # The .job-link anchors themselves match the card selector but contain
        # no title element, so postings come from the fallback list
        postings = parser.parse(html)

        assert [p.url for p in postings] == ["https://www.work.ua/jobs/3/"]
        assert postings[0].title == "Backend Lead"

    def test_empty_page(self, parser):
        assert parser.parse("<html></html>") == []
