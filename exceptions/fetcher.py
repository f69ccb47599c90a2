# exceptions/fetcher.py
"""
Custom exceptions for upstream fetch operations.
"""

from typing import Optional


class FetchError(Exception):
    """
    Base exception for a failed upstream request.
    Carries the HTTP status (0 when no response was received) and the
    truncated head of the response body for diagnostics.
    """

    def __init__(
        self,
        message: str,
        status: int = 0,
        head: str = "",
        url: Optional[str] = None,
    ):
        super().__init__(message)
        self.status = status
        self.head = head
        self.url = url

    def describe(self) -> str:
        """
        One-line description including the response head, if any.
        """
        text = str(self)
        if self.head:
            text += f" | head={self.head}"
        return text


class TransientFetchError(FetchError):
    """
    Raised for statuses that are worth retrying
    """

    pass


class AuthorizationError(TransientFetchError):
    """
    Raised on 401/403; the session is refreshed before the next attempt
    """

    pass


class NonJsonResponseError(FetchError):
    """
    Raised when the body is not JSON; terminal for the request
    """

    pass


class SessionError(Exception):
    """
    Raised when the browser session cannot be started or navigated
    """

    pass
