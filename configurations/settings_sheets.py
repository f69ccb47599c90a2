# configurations/settings_sheets.py
"""
Google Sheets access settings.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from .settings_base import env_flag, env_str

SHEETS_SCOPE = "https://www.googleapis.com/auth/spreadsheets"
CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"


@dataclass(frozen=True)
class SheetsConfig:
    """
    Spreadsheet id and credential routing
    """

    spreadsheet_id: str = ""
    credentials_file: str = ""
    impersonate_service_account: str = ""
    disabled: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SheetsConfig":
        return cls(
            spreadsheet_id=env_str("SPREADSHEET_ID", "", environ),
            credentials_file=env_str("GOOGLE_APPLICATION_CREDENTIALS", "", environ),
            impersonate_service_account=env_str(
                "GOOGLE_IMPERSONATE_SERVICE_ACCOUNT", "", environ
            ),
            disabled=env_flag("DISABLE_SHEETS", False, environ),
        )

    @property
    def enabled(self) -> bool:
        return bool(self.spreadsheet_id) and not self.disabled

    @property
    def uses_impersonation(self) -> bool:
        return bool(self.impersonate_service_account)
