# configurations/settings_notifier.py
"""
Telegram alert settings.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from .settings_base import env_str


@dataclass(frozen=True)
class TelegramConfig:
    """
    Bot token and target chat. Alerts are skipped when either is missing.
    """

    bot_token: str = ""
    chat_id: str = ""
    api_base_url: str = "https://api.telegram.org"
    timeout: float = 10.0

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "TelegramConfig":
        return cls(
            bot_token=env_str("TELEGRAM_BOT_TOKEN", "", environ),
            chat_id=env_str("TELEGRAM_CHAT_ID", "", environ),
        )

    @property
    def enabled(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    @property
    def send_message_url(self) -> str:
        return f"{self.api_base_url}/bot{self.bot_token}/sendMessage"
