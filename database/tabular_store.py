# database/tabular_store.py
"""
Tabular store interface.

A tabular store holds named tables ("tabs"), each a header row followed by
data rows of text cells. Backed by Google Sheets or by a SQL database.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from extractors.base_extractor import to_text


def to_cell(value: Any) -> str:
    return to_text(value)


def header_matches(first_row: Sequence[Any], expected: Sequence[str]) -> bool:
    """
    Case-insensitive, whitespace-trimmed prefix comparison
    """
    if len(first_row) < len(expected):
        return False
    return all(
        to_cell(actual).strip().lower() == str(wanted).strip().lower()
        for actual, wanted in zip(first_row, expected)
    )


@dataclass
class TableData:
    """
    Contents of one table
    """

    header: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    def records(self) -> List[Dict[str, str]]:
        """
        Rows as header -> cell mappings; short rows are padded with ""
        """
        records = []
        for row in self.rows:
            record = {}
            for index, name in enumerate(self.header):
                if not name:
                    continue
                record[name] = to_cell(row[index]) if index < len(row) else ""
            records.append(record)
        return records

    @property
    def is_empty(self) -> bool:
        return not self.header and not self.rows


class TabularStore(ABC):
    """
    Abstract tabular store
    """

    @abstractmethod
    def list_tables(self) -> List[str]:
        """
        Names of all existing tables
        """

    def find_table(self, name: str) -> Optional[str]:
        """
        Existing table name matching case-insensitively, or None
        """
        wanted = name.lower()
        for existing in self.list_tables():
            if existing.lower() == wanted:
                return existing
        return None

    @abstractmethod
    def ensure_table(self, name: str) -> str:
        """
        Create the table when missing.

        Returns:
            The name actually used (an existing table may differ in case)
        """

    @abstractmethod
    def read_rows(self, name: str) -> Optional[TableData]:
        """
        Header and rows of a table, None when the table does not exist
        """

    @abstractmethod
    def replace_rows(
        self, name: str, header: Sequence[str], rows: Sequence[Sequence[Any]]
    ) -> None:
        """
        Replace the whole table with header + rows
        """

    @abstractmethod
    def append_rows(self, name: str, rows: Sequence[Sequence[Any]]) -> None:
        """
        Append rows after the existing ones, never truncating
        """

    @abstractmethod
    def ensure_header(self, name: str, header: Sequence[str]) -> bool:
        """
        Make header the first row without losing existing data.

        Returns:
            True when the header was written, False when already present
        """

    def ping(self) -> bool:
        """
        Raise if the store cannot be reached
        """
        self.list_tables()
        return True

    @property
    def atomic_replace(self) -> bool:
        return False

    def describe(self) -> str:
        return self.__class__.__name__
