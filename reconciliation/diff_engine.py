# reconciliation/diff_engine.py
"""
Snapshot diff engine.

Classifies the records of the current run against the previous snapshot
as created / updated / unchanged / deleted and builds the new snapshot.
Performs no I/O.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional

from logger import SnapshotColumns

from .hashing import content_hash
from .models import ChangeEvent, ChangeType, ReconciliationResult, Record, StoredRecord

logger = logging.getLogger(__name__)

_INACTIVE_VALUES = {"0", "false", "no"}


def is_active(row: Mapping) -> bool:
    """
    Rows without an _active column predate soft deletes and count as active.
    """
    value = row.get(SnapshotColumns.ACTIVE)
    if value is None:
        return True
    return str(value).strip().lower() not in _INACTIVE_VALUES


class SnapshotDiffEngine:
    """
    Reconciles one run's records with the previous snapshot.
    """

    def __init__(self, identity_field: str = SnapshotColumns.IDENTITY):
        self.identity_field = identity_field

    def reconcile(
        self,
        new_records: Iterable[Record],
        prev_snapshot: Mapping[str, StoredRecord],
        run_id: str,
        now: Optional[str] = None,
        protected: Optional[Iterable[str]] = None,
    ) -> ReconciliationResult:
        """
        Args:
            new_records: normalized records of this run
            prev_snapshot: previous snapshot keyed by identity ({} on a first run)
            run_id: id stamped on every change event
            now: timestamp for changes (defaults to current UTC time)
            protected: partitions whose stored rows are carried forward as
                they are instead of being soft-deleted when unseen (grades
                that failed or were filtered out this run).

        Returns:
            ReconciliationResult with exactly one snapshot row per identity
        """
        now = now or datetime.now(timezone.utc).isoformat()
        counts = {change_type: 0 for change_type in ChangeType}
        events: List[ChangeEvent] = []
        snapshot: Dict[str, StoredRecord] = {}
        kept = {str(p) for p in protected or ()}

        latest, skipped = self._latest_by_identity(new_records)

        for identity, record in latest.items():
            new_hash = content_hash(record.hash_source)
            prev = prev_snapshot.get(identity)

            if prev is None or not is_active(prev):
                change_type = ChangeType.CREATED
                old_hash = ""
            elif str(prev.get(SnapshotColumns.HASH, "")) != new_hash:
                change_type = ChangeType.UPDATED
                old_hash = str(prev.get(SnapshotColumns.HASH, ""))
            else:
                change_type = ChangeType.UNCHANGED
                old_hash = new_hash

            counts[change_type] += 1
            if change_type is ChangeType.UNCHANGED:
                snapshot[identity] = self._row(
                    record,
                    prev.get(SnapshotColumns.HASH, new_hash),
                    prev.get(SnapshotColumns.LAST_CHANGED_AT, ""),
                    prev.get(SnapshotColumns.LAST_CHANGE_TYPE, ""),
                    active=1,
                )
                continue

            snapshot[identity] = self._row(
                record, new_hash, now, change_type.value, active=1
            )
            events.append(
                ChangeEvent(
                    run_id=run_id,
                    timestamp=now,
                    identity=identity,
                    change_type=change_type,
                    old_hash=old_hash,
                    new_hash=new_hash,
                    partition=record.partition,
                )
            )

        for identity, prev in prev_snapshot.items():
            if identity in snapshot:
                continue

            row = dict(prev)
            if (
                str(prev.get(SnapshotColumns.GRADE, "")) in kept
                or not is_active(prev)
            ):
                # protected partition, or already soft-deleted
                snapshot[identity] = row
                continue

            row[SnapshotColumns.ACTIVE] = 0
            row[SnapshotColumns.LAST_CHANGE_TYPE] = ChangeType.DELETED.value
            row[SnapshotColumns.LAST_CHANGED_AT] = now
            snapshot[identity] = row
            counts[ChangeType.DELETED] += 1
            events.append(
                ChangeEvent(
                    run_id=run_id,
                    timestamp=now,
                    identity=identity,
                    change_type=ChangeType.DELETED,
                    old_hash=str(prev.get(SnapshotColumns.HASH, "")),
                    new_hash="",
                    partition=str(prev.get(SnapshotColumns.GRADE, "")),
                )
            )

        logger.info(
            "Reconciled %d records against %d stored rows: %s",
            len(latest),
            len(prev_snapshot),
            ", ".join(f"{k.value}={v}" for k, v in counts.items()),
        )
        return ReconciliationResult(
            snapshot=snapshot, events=events, counts=counts, skipped=skipped
        )

    def _latest_by_identity(self, records: Iterable[Record]):
        """
        Last write wins for repeated identities; position is that of the
        first occurrence.
        """
        latest: Dict[str, Record] = {}
        skipped = 0
        for record in records:
            identity = (record.identity or "").strip()
            if not identity:
                skipped += 1
                logger.warning(
                    "Skipping record without identity key (partition %s)",
                    record.partition or "n/a",
                )
                continue
            if identity in latest:
                logger.debug("Duplicate identity %s in input, keeping last", identity)
            latest[identity] = record
        return latest, skipped

    def _row(
        self,
        record: Record,
        hash_value,
        changed_at,
        change_type: str,
        active: int,
    ) -> StoredRecord:
        row: StoredRecord = {self.identity_field: record.identity.strip()}
        for key, value in record.fields.items():
            if key == self.identity_field or key in SnapshotColumns.ALL:
                continue
            row[key] = value
        row[SnapshotColumns.HASH] = hash_value
        row[SnapshotColumns.LAST_CHANGED_AT] = changed_at
        row[SnapshotColumns.LAST_CHANGE_TYPE] = change_type
        row[SnapshotColumns.ACTIVE] = active
        return row
