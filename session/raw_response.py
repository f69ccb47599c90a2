# session/raw_response.py
from dataclasses import dataclass

from logger import ScrapingConstants


@dataclass(frozen=True)
class RawResponse:
    """
    Undecoded upstream response. status is 0 when no response was received.
    """

    status: int
    content_type: str = ""
    text: str = ""
    error: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300 and not self.error

    @property
    def head(self) -> str:
        return self.text[: ScrapingConstants.HEAD_LENGTH]
