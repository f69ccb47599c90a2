# session/direct_session.py
"""
Cookie-less HTTP session used as a fallback when the browser session is
refused (401/403). Most ResultsVault endpoints are public.
"""

import logging
from typing import Dict, Optional

import requests

from logger import ScrapingConstants

from .raw_response import RawResponse

logger = logging.getLogger(__name__)


class DirectSession:
    def __init__(self, timeout: float = 30.0, http: Optional[requests.Session] = None):
        self.timeout = timeout
        self.http = http or requests.Session()
        self.http.headers.update(
            {
                "accept": ScrapingConstants.ACCEPT_HEADER,
                "user-agent": ScrapingConstants.DIRECT_USER_AGENT,
            }
        )

    def warm_up(self):
        pass

    def refresh(self):
        pass

    def request(self, url: str, headers: Optional[Dict[str, str]] = None) -> RawResponse:
        try:
            response = self.http.get(url, headers=headers or {}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug("Direct request to %s failed: %s", url, e)
            return RawResponse(status=0, error=f"Fetch failed: {e}")

        return RawResponse(
            status=response.status_code,
            content_type=response.headers.get("content-type", ""),
            text=response.text,
        )

    def close(self):
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
