"""
Unit tests for appraisal sheet downloads.

Run: pytest tests/unit/test_sheet_fetcher.py -v
"""

import pytest
import requests

from utils.sheet_fetcher import SHEET_UNAVAILABLE_TEXT, SheetFetcher, to_csv_export_url


class FakeResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, timeout=None):
        self.requests.append({"url": url, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


class TestToCsvExportUrl:

    @pytest.mark.parametrize("url", [
        "https://docs.google.com/spreadsheets/d/1AbC-d_E/edit#gid=0",
        "https://docs.google.com/spreadsheets/d/1AbC-d_E/edit?usp=sharing",
        "https://docs.google.com/spreadsheets/d/1AbC-d_E",
    ])
    def test_google_sheet_links(self, url):
        assert to_csv_export_url(url) == (
            "https://docs.google.com/spreadsheets/d/1AbC-d_E/export?format=csv&gid=0"
        )

    def test_other_urls_unchanged(self):
        assert to_csv_export_url("https://example.com/appraisal.csv") == "https://example.com/appraisal.csv"


class TestSheetFetcher:

    def test_returns_csv_text(self):
        session = FakeSession(response=FakeResponse(text="Competency,Rating\nSQL,2"))
        fetcher = SheetFetcher(timeout=3, session=session)

        text = fetcher.fetch_text("https://docs.google.com/spreadsheets/d/abc/edit")

        assert text == "Competency,Rating\nSQL,2"
        assert session.requests == [{
            "url": "https://docs.google.com/spreadsheets/d/abc/export?format=csv&gid=0",
            "timeout": 3,
        }]

    def test_http_error_returns_placeholder(self):
        fetcher = SheetFetcher(session=FakeSession(response=FakeResponse(status_code=403)))
        assert fetcher.fetch_text("https://docs.google.com/spreadsheets/d/abc") == SHEET_UNAVAILABLE_TEXT

    @pytest.mark.parametrize("error", [
        requests.Timeout("read timed out"),
        requests.ConnectionError("no route to host"),
    ])
    def test_network_failure_returns_placeholder(self, error):
        fetcher = SheetFetcher(session=FakeSession(error=error))
        assert fetcher.fetch_text("https://docs.google.com/spreadsheets/d/abc") == SHEET_UNAVAILABLE_TEXT

    def test_default_timeout_from_settings(self):
        from config.settings import settings

        assert SheetFetcher(session=FakeSession()).timeout == settings.SHEET_FETCH_TIMEOUT_SECONDS
