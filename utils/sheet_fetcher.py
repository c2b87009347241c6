"""
Download appraisal sheets as CSV text.

Appraisal sources are Google Sheets share links. They are exported as CSV
and handed to the skill extractor verbatim. A sheet that cannot be fetched
yields SHEET_UNAVAILABLE_TEXT so the extraction pipeline still runs.
"""

import logging
import re
from typing import Optional

import requests

from config.settings import settings

logger = logging.getLogger(__name__)

SHEET_UNAVAILABLE_TEXT = "Sheet data could not be retrieved"

_SHEET_ID_PATTERN = re.compile(r"/spreadsheets/d/([a-zA-Z0-9-_]+)")


def to_csv_export_url(sheet_url: str) -> str:
    """
    Convert a Google Sheets URL to its CSV export URL (first tab).

    URLs that do not look like Google Sheets are returned unchanged.
    """
    match = _SHEET_ID_PATTERN.search(sheet_url or "")
    if not match:
        return sheet_url
    return f"https://docs.google.com/spreadsheets/d/{match.group(1)}/export?format=csv&gid=0"


class SheetFetcher:
    """Fetch appraisal sheet content over HTTP."""

    def __init__(self, timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        self.timeout = timeout or settings.SHEET_FETCH_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def fetch_text(self, sheet_url: str) -> str:
        """
        Return the sheet's CSV text, or SHEET_UNAVAILABLE_TEXT on any failure.
        """
        csv_url = to_csv_export_url(sheet_url)
        logger.info(f"Fetching appraisal sheet from {csv_url}")

        try:
            response = self.session.get(csv_url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Error fetching sheet data: {e}")
            return SHEET_UNAVAILABLE_TEXT

        if not response.ok:
            logger.warning(f"Failed to fetch sheet data: HTTP {response.status_code}")
            return SHEET_UNAVAILABLE_TEXT

        logger.info(f"Fetched sheet data, length: {len(response.text)}")
        return response.text
