# session/fetch_client.py
"""
JSON fetch client for the ResultsVault API.
"""

import json
import logging
from typing import Any, Dict, Optional

from configurations import RetryConfig
from exceptions import (
    AuthorizationError,
    FetchError,
    NonJsonResponseError,
    SessionError,
    TransientFetchError,
)

from .direct_session import DirectSession
from .raw_response import RawResponse
from .retry import with_retry

logger = logging.getLogger(__name__)


class ResultsVaultClient:
    """
    Fetches JSON through a session, retrying transient failures.

    On 401/403 the session is refreshed before the next attempt and, when
    enabled, a cookie-less direct request is tried first.
    """

    def __init__(
        self,
        retry_config: Optional[RetryConfig] = None,
        api_headers: Optional[Dict[str, str]] = None,
        fallback_session=None,
    ):
        self.retry_config = retry_config or RetryConfig()
        self.api_headers = dict(api_headers or {})
        self._fallback_session = fallback_session

    @property
    def fallback_session(self):
        if self._fallback_session is None:
            self._fallback_session = DirectSession()
        return self._fallback_session

    def fetch_json(self, url: str, session, label: str = "") -> Any:
        """
        Fetch and decode one JSON document.

        Args:
            url: API url
            session: BrowserSession (or anything with request/refresh)
            label: short name used in log messages

        Returns:
            The decoded JSON value

        Raises:
            FetchError: the last failure once the retry budget is spent, or
                immediately for terminal failures
        """

        def _refresh_on_auth_failure(error: Exception, attempt: int):
            if isinstance(error, AuthorizationError):
                try:
                    session.refresh()
                except SessionError as refresh_error:
                    logger.warning(
                        "Session refresh before retry failed: %s", refresh_error
                    )

        @with_retry(self.retry_config, on_retry=_refresh_on_auth_failure)
        def _attempt():
            return self._fetch_once(url, session, label)

        return _attempt()

    def _fetch_once(self, url: str, session, label: str) -> Any:
        try:
            response = session.request(url, self.api_headers)
        except SessionError as error:
            # browser gone or script failed: no response received
            raise TransientFetchError(f"Fetch failed: {error}", url=url) from error
        try:
            return self.parse_response(response, url)
        except AuthorizationError as error:
            logger.warning("%s %s -> %s", label, url, error.describe())
            if not self.retry_config.direct_fetch_on_auth_failure:
                raise
            try:
                payload = self.parse_response(
                    self.fallback_session.request(url, self.api_headers), url
                )
            except FetchError as fallback_error:
                logger.debug("Direct fallback failed: %s", fallback_error.describe())
                raise error
            logger.info("Direct fallback succeeded for %s", label or url)
            return payload
        except FetchError as error:
            logger.warning("%s %s -> %s", label, url, error.describe())
            raise

    def parse_response(self, response: RawResponse, url: str = "") -> Any:
        """
        Decode one response or raise the matching FetchError
        """
        if response.status == 0:
            raise TransientFetchError(
                f"Fetch failed: {response.error or 'no response'}", url=url
            )

        if not 200 <= response.status < 300:
            if self.retry_config.is_auth_failure(response.status):
                error_class = AuthorizationError
            elif self.retry_config.is_transient(response.status):
                error_class = TransientFetchError
            else:
                error_class = FetchError
            raise error_class(
                f"HTTP {response.status}",
                status=response.status,
                head=response.head,
                url=url,
            )

        text = response.text.strip()
        if not text or text[0] not in "{[":
            raise NonJsonResponseError(
                "Non-JSON response", status=response.status, head=response.head, url=url
            )
        try:
            return json.loads(text)
        except ValueError as error:
            raise NonJsonResponseError(
                f"JSON parse error: {error}",
                status=response.status,
                head=response.head,
                url=url,
            ) from error
