# database/sheets_store.py
"""
Google Sheets backed tabular store.

replace_rows is clear + append and therefore NOT atomic: a reader looking at
the sheet between the two calls sees an empty or partially written tab.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import google.auth
from google.auth import impersonated_credentials
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from configurations import SheetsConfig
from configurations.settings_sheets import CLOUD_PLATFORM_SCOPE, SHEETS_SCOPE
from exceptions import StoreConnectionError, TabularStoreError
from logger import SheetConstants

from .tabular_store import TableData, TabularStore, header_matches, to_cell

logger = logging.getLogger(__name__)

VALUE_INPUT_OPTION = "RAW"
IMPERSONATION_LIFETIME = 3600


def build_credentials(config: SheetsConfig):
    """
    Service account key file, application default credentials, or either
    of those impersonating another service account.
    """
    try:
        if config.uses_impersonation:
            source, _ = google.auth.default(scopes=[CLOUD_PLATFORM_SCOPE])
            logger.info(
                "Using impersonation of %s", config.impersonate_service_account
            )
            return impersonated_credentials.Credentials(
                source_credentials=source,
                target_principal=config.impersonate_service_account,
                target_scopes=[SHEETS_SCOPE],
                delegates=[],
                lifetime=IMPERSONATION_LIFETIME,
            )
        if config.credentials_file:
            logger.info("Using service account key %s", config.credentials_file)
            return service_account.Credentials.from_service_account_file(
                config.credentials_file, scopes=[SHEETS_SCOPE]
            )
        credentials, _ = google.auth.default(scopes=[SHEETS_SCOPE])
        return credentials
    except (GoogleAuthError, OSError, ValueError) as error:
        raise StoreConnectionError(f"Google credentials unavailable: {error}") from error


def a1_range(title: str, cells: str = "") -> str:
    quoted = "'" + title.replace("'", "''") + "'"
    return f"{quoted}!{cells}" if cells else quoted


class GoogleSheetsStore(TabularStore):
    """
    One spreadsheet; each tab is a table. Tab lookup is case-insensitive.
    """

    def __init__(self, config: SheetsConfig, service=None):
        if not config.spreadsheet_id:
            raise StoreConnectionError("SPREADSHEET_ID is not configured")
        self.config = config
        self.spreadsheet_id = config.spreadsheet_id
        self._service = service

    @property
    def service(self):
        if self._service is None:
            self._service = build(
                "sheets",
                "v4",
                credentials=build_credentials(self.config),
                cache_discovery=False,
            )
        return self._service

    @property
    def spreadsheets(self):
        return self.service.spreadsheets()

    def describe(self) -> str:
        return f"GoogleSheetsStore({self.spreadsheet_id})"

    def _execute(self, request, action: str):
        try:
            return request.execute()
        except HttpError as error:
            status = getattr(error.resp, "status", 0)
            if status in (401, 403, 404):
                raise StoreConnectionError(f"{action} failed: {error}") from error
            raise TabularStoreError(f"{action} failed: {error}") from error
        except GoogleAuthError as error:
            raise StoreConnectionError(f"{action} failed: {error}") from error

    def _sheet_properties(self) -> List[Dict[str, Any]]:
        meta = self._execute(
            self.spreadsheets.get(
                spreadsheetId=self.spreadsheet_id,
                fields="sheets.properties(title,sheetId)",
            ),
            "Reading spreadsheet metadata",
        )
        return [sheet.get("properties", {}) for sheet in meta.get("sheets", [])]

    def _sheet_id(self, title: str) -> Optional[int]:
        for properties in self._sheet_properties():
            if properties.get("title") == title:
                return properties.get("sheetId")
        return None

    def list_tables(self) -> List[str]:
        return [properties.get("title", "") for properties in self._sheet_properties()]

    def ensure_table(self, name: str) -> str:
        existing = self.find_table(name)
        if existing is not None:
            if existing != name:
                logger.info("Using existing tab %r for %r", existing, name)
            return existing

        self._execute(
            self.spreadsheets.batchUpdate(
                spreadsheetId=self.spreadsheet_id,
                body={"requests": [{"addSheet": {"properties": {"title": name}}}]},
            ),
            f"Creating tab {name}",
        )
        logger.info("Created tab %s", name)
        return name

    def read_rows(self, name: str) -> Optional[TableData]:
        title = self.find_table(name)
        if title is None:
            return None
        result = self._execute(
            self.spreadsheets.values().get(
                spreadsheetId=self.spreadsheet_id,
                range=a1_range(title, SheetConstants.CLEAR_RANGE),
            ),
            f"Reading {title}",
        )
        values = result.get("values", [])
        if not values:
            return TableData()
        return TableData(
            header=[to_cell(cell) for cell in values[0]],
            rows=[[to_cell(cell) for cell in row] for row in values[1:]],
        )

    def replace_rows(
        self, name: str, header: Sequence[str], rows: Sequence[Sequence[Any]]
    ) -> None:
        title = self.ensure_table(name)
        self._execute(
            self.spreadsheets.values().clear(
                spreadsheetId=self.spreadsheet_id,
                range=a1_range(title, SheetConstants.CLEAR_RANGE),
                body={},
            ),
            f"Clearing {title}",
        )
        values = [list(header)] + [[to_cell(cell) for cell in row] for row in rows]
        self._append(title, values)
        logger.debug("Replaced %s with %d rows", title, len(rows))

    def append_rows(self, name: str, rows: Sequence[Sequence[Any]]) -> None:
        if not rows:
            return
        title = self.ensure_table(name)
        self._append(title, [[to_cell(cell) for cell in row] for row in rows])

    def _append(self, title: str, values: List[List[str]]) -> None:
        self._execute(
            self.spreadsheets.values().append(
                spreadsheetId=self.spreadsheet_id,
                range=a1_range(title, "A1"),
                valueInputOption=VALUE_INPUT_OPTION,
                insertDataOption="INSERT_ROWS",
                body={"values": values},
            ),
            f"Appending to {title}",
        )

    def ensure_header(self, name: str, header: Sequence[str]) -> bool:
        title = self.ensure_table(name)
        result = self._execute(
            self.spreadsheets.values().get(
                spreadsheetId=self.spreadsheet_id, range=a1_range(title, "1:1")
            ),
            f"Reading header of {title}",
        )
        first_row = (result.get("values") or [[]])[0]
        if header_matches(first_row, header):
            logger.info("Header already present in %s", title)
            return False

        if any(to_cell(cell).strip() for cell in first_row):
            # Row 1 holds data: push it down before writing the header
            self._execute(
                self.spreadsheets.batchUpdate(
                    spreadsheetId=self.spreadsheet_id,
                    body={
                        "requests": [
                            {
                                "insertDimension": {
                                    "range": {
                                        "sheetId": self._sheet_id(title),
                                        "dimension": "ROWS",
                                        "startIndex": 0,
                                        "endIndex": 1,
                                    },
                                    "inheritFromBefore": False,
                                }
                            }
                        ]
                    },
                ),
                f"Inserting header row in {title}",
            )

        self._execute(
            self.spreadsheets.values().update(
                spreadsheetId=self.spreadsheet_id,
                range=a1_range(title, "A1"),
                valueInputOption=VALUE_INPUT_OPTION,
                body={"values": [list(header)]},
            ),
            f"Writing header of {title}",
        )
        logger.info("Header written to %s: %s", title, ", ".join(header))
        return True
