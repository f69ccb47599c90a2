# notifications/telegram_notifier.py
"""
Telegram alerts. Delivery is best effort: failures are logged and never
interrupt a run.
"""

import logging
from typing import Optional

import requests

from configurations import TelegramConfig
from exceptions import NotificationError

logger = logging.getLogger(__name__)

# Telegram rejects longer messages
MAX_MESSAGE_LENGTH = 4096


class TelegramNotifier:
    """
    Sends plain-text messages (no parse mode, link previews disabled).
    """

    def __init__(
        self, config: TelegramConfig, http: Optional[requests.Session] = None
    ):
        self.config = config
        self.http = http or requests.Session()

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def send(self, text: str) -> None:
        """
        Deliver one message.

        Raises:
            NotificationError: when Telegram could not be reached or refused
        """
        payload = {
            "chat_id": self.config.chat_id,
            "text": text[:MAX_MESSAGE_LENGTH],
            "disable_web_page_preview": True,
        }
        try:
            response = self.http.post(
                self.config.send_message_url, json=payload, timeout=self.config.timeout
            )
            response.raise_for_status()
        except requests.RequestException as error:
            raise NotificationError(f"Telegram error: {error}") from error

    def notify(self, text: str) -> bool:
        """
        Best-effort send.

        Returns:
            True when the message was delivered
        """
        if not self.enabled:
            logger.debug("Telegram not configured, skipping: %s", text)
            return False
        try:
            self.send(text)
        except NotificationError as error:
            logger.error("%s", error)
            return False
        return True
