# database/snapshot_store.py
"""
Snapshot store adapter and run ledger on top of a TabularStore.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from configurations import LoadFailurePolicy
from exceptions import SnapshotLoadError, SnapshotPersistError, TabularStoreError
from exporters.headers import rows_for_header, unique_fields
from logger import LogEntry, SheetConstants, SnapshotColumns
from reconciliation.models import ChangeEvent, RunSummary, StoredRecord

from .tabular_store import TabularStore

logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    Reads the previous snapshot and writes the new one plus the change log.
    """

    def __init__(
        self,
        store: TabularStore,
        table: str = SheetConstants.SNAPSHOT_TAB,
        identity_field: str = SnapshotColumns.IDENTITY,
        load_failure_policy: Optional[LoadFailurePolicy] = LoadFailurePolicy.FAIL,
        changes_table: str = SheetConstants.CHANGES_TAB,
    ):
        self.store = store
        self.table = table
        self.identity_field = identity_field
        self.load_failure_policy = load_failure_policy or LoadFailurePolicy.FAIL
        self.changes_table = changes_table

    def load(self) -> Dict[str, StoredRecord]:
        """
        Previous snapshot keyed by identity.

        A missing or empty table is a first run and yields {}. When the store
        cannot be read the configured policy decides.

        Raises:
            SnapshotLoadError: store unreachable and policy is FAIL
        """
        try:
            data = self.store.read_rows(self.table)
        except TabularStoreError as error:
            if self.load_failure_policy is LoadFailurePolicy.FIRST_RUN:
                logger.warning(
                    "Snapshot %s unreadable (%s), continuing as first run",
                    self.table,
                    error,
                )
                return {}
            raise SnapshotLoadError(
                f"Cannot load snapshot {self.table}: {error}"
            ) from error

        if data is None or data.is_empty:
            logger.info("No snapshot in %s yet, treating as first run", self.table)
            return {}

        if self.identity_field not in data.header:
            raise SnapshotLoadError(
                f"Snapshot {self.table} has no {self.identity_field} column"
            )

        snapshot: Dict[str, StoredRecord] = {}
        for record in data.records():
            identity = record.get(self.identity_field, "").strip()
            if not identity:
                continue
            if identity in snapshot:
                logger.warning("Duplicate snapshot row for %s, keeping last", identity)
            snapshot[identity] = record

        logger.info("Loaded %d snapshot rows from %s", len(snapshot), self.table)
        return snapshot

    def persist(self, records: Sequence[StoredRecord]) -> None:
        """
        Fully replace the snapshot table.

        Raises:
            SnapshotPersistError: the write failed
        """
        header = unique_fields(records)
        if not header:
            header = [self.identity_field] + list(SnapshotColumns.ALL)
        try:
            self.store.replace_rows(self.table, header, rows_for_header(records, header))
        except TabularStoreError as error:
            raise SnapshotPersistError(
                f"Cannot write snapshot {self.table}: {error}"
            ) from error
        logger.info("Persisted %d snapshot rows to %s", len(records), self.table)

    def append_changes(self, events: Iterable[ChangeEvent]) -> int:
        """
        Append CHANGES rows; never truncates.

        Returns:
            Number of rows appended
        """
        rows = [event.to_row() for event in events]
        if not rows:
            return 0
        try:
            self.store.ensure_header(self.changes_table, SheetConstants.CHANGES_HEADER)
            self.store.append_rows(self.changes_table, rows)
        except TabularStoreError as error:
            raise SnapshotPersistError(
                f"Cannot append to {self.changes_table}: {error}"
            ) from error
        logger.info("Appended %d change events", len(rows))
        return len(rows)


class RunLedger:
    """
    Appends RUNS and LOG rows
    """

    def __init__(self, store: TabularStore):
        self.store = store

    def ensure_headers(self) -> List[str]:
        """
        Install the fixed bookkeeping headers.

        Returns:
            Tables whose header was written
        """
        written = []
        for table, header in SheetConstants.BOOKKEEPING_HEADERS.items():
            if self.store.ensure_header(table, header):
                written.append(table)
        return written

    def append_run(self, summary: RunSummary) -> None:
        self.store.ensure_header(SheetConstants.RUNS_TAB, SheetConstants.RUNS_HEADER)
        self.store.append_rows(SheetConstants.RUNS_TAB, [summary.to_row()])

    def append_log(self, entries: Iterable[LogEntry]) -> int:
        rows = [entry.to_row() for entry in entries]
        if not rows:
            return 0
        self.store.ensure_header(SheetConstants.LOG_TAB, SheetConstants.LOG_HEADER)
        self.store.append_rows(SheetConstants.LOG_TAB, rows)
        return len(rows)
