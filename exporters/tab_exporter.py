# exporters/tab_exporter.py
"""
Tabular store export sink: one tab per grade plus MASTER.
"""

import logging
from typing import Any, Mapping, Sequence

from database.tabular_store import TabularStore
from logger import SheetConstants

from .headers import rows_for_header, unique_fields

logger = logging.getLogger(__name__)


class TabExporter:
    def __init__(self, store: TabularStore):
        self.store = store

    def write(self, table: str, rows: Sequence[Mapping[str, Any]]) -> int:
        header = unique_fields(rows)
        self.store.replace_rows(table, header, rows_for_header(rows, header))
        logger.info("Wrote %d rows to tab %s", len(rows), table)
        return len(rows)

    def write_grade(self, grade_id: str, rows: Sequence[Mapping[str, Any]]) -> int:
        return self.write(f"{SheetConstants.GRADE_TAB_PREFIX}{grade_id}", rows)

    def write_master(self, rows: Sequence[Mapping[str, Any]]) -> int:
        return self.write(SheetConstants.MASTER_TAB, rows)
