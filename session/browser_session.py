# session/browser_session.py
"""
Headless Chrome session that carries the match centre cookies.

API calls run as an in-page fetch with credentials included, so the
cookies obtained by opening the referrer page are sent along.
"""

import logging
import threading
from typing import Dict, Optional

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.support.ui import WebDriverWait

from exceptions import SessionError
from logger import ScrapingConstants

from .raw_response import RawResponse

logger = logging.getLogger(__name__)

# Runs inside the page; the last argument is the selenium callback
_FETCH_SCRIPT = """
const url = arguments[0];
const headers = arguments[1];
const done = arguments[arguments.length - 1];
fetch(url, {credentials: "include", headers: headers, mode: "cors"})
  .then(async (res) => {
    const text = await res.text();
    done({
      status: res.status,
      contentType: res.headers.get("content-type") || "",
      text: text,
      error: ""
    });
  })
  .catch((e) => done({status: 0, contentType: "", text: "", error: String(e)}));
"""


class BrowserSession:
    """
    One browser context. A single handle is never used by two requests at
    the same time.
    """

    def __init__(
        self,
        referrer_url: str = ScrapingConstants.DEFAULT_REFERRER,
        navigation_timeout: float = 30.0,
        headless: bool = True,
    ):
        self.referrer_url = referrer_url
        self.navigation_timeout = navigation_timeout
        self.headless = headless
        self._driver = None
        self._lock = threading.Lock()

    def _build_options(self) -> Options:
        options = Options()
        if self.headless:
            options.add_argument("--headless")
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        options.add_argument("--disable-web-security")
        options.add_argument("--disable-site-isolation-trials")
        return options

    @property
    def driver(self):
        if self._driver is None:
            try:
                self._driver = webdriver.Chrome(options=self._build_options())
            except WebDriverException as e:
                raise SessionError(f"Could not start Chrome: {e}") from e
            self._driver.set_page_load_timeout(self.navigation_timeout)
            self._driver.set_script_timeout(self.navigation_timeout)
        return self._driver

    def _navigate(self, url: str):
        try:
            self.driver.get(url)
            WebDriverWait(self.driver, self.navigation_timeout).until(
                lambda d: d.execute_script("return document.readyState") == "complete"
            )
        except TimeoutException:
            # cookies are usually set before the page finishes loading
            logger.warning("Timed out waiting for %s to finish loading", url)
        except WebDriverException as e:
            raise SessionError(f"Navigation to {url} failed: {e}") from e

    def warm_up(self):
        """
        Open the referrer page to obtain session cookies
        """
        with self._lock:
            logger.info("Opening referrer %s", self.referrer_url)
            self._navigate(self.referrer_url)

    def refresh(self):
        """
        Re-open the referrer page to renew the session
        """
        with self._lock:
            logger.info("Refreshing session via %s", self.referrer_url)
            self._navigate(self.referrer_url)

    def request(self, url: str, headers: Optional[Dict[str, str]] = None) -> RawResponse:
        request_headers = {
            "accept": ScrapingConstants.ACCEPT_HEADER,
            "x-requested-with": "XMLHttpRequest",
        }
        request_headers.update(headers or {})

        with self._lock:
            try:
                result = self.driver.execute_async_script(
                    _FETCH_SCRIPT, url, request_headers
                )
            except TimeoutException:
                return RawResponse(status=0, error="Script timeout")
            except WebDriverException as e:
                raise SessionError(f"In-page fetch failed: {e}") from e

        result = result or {}
        return RawResponse(
            status=int(result.get("status") or 0),
            content_type=result.get("contentType") or "",
            text=result.get("text") or "",
            error=result.get("error") or "",
        )

    def close(self):
        with self._lock:
            if self._driver is not None:
                try:
                    self._driver.quit()
                except WebDriverException as e:
                    logger.warning("Error closing browser: %s", e)
                finally:
                    self._driver = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
