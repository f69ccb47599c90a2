# reconciliation/models.py
"""
Data models for snapshot reconciliation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from logger import SnapshotColumns

# One stored snapshot row, keyed by column name
StoredRecord = Dict[str, Any]


class ChangeType(Enum):
    """
    Classification of a record against the previous snapshot
    """

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    DELETED = "deleted"


@dataclass
class Record:
    """
    One normalized upstream entity.

    fields holds the flat output row; hash_source holds the projection onto
    the hash-field list, resolved against the original nested entity.
    """

    identity: str
    partition: str
    fields: Dict[str, Any]
    hash_source: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ChangeEvent:
    """
    Immutable CHANGES row
    """

    run_id: str
    timestamp: str
    identity: str
    change_type: ChangeType
    old_hash: str
    new_hash: str
    partition: str
    field: str = SnapshotColumns.WHOLE_RECORD_FIELD

    def to_row(self) -> List[str]:
        return [
            self.run_id,
            self.timestamp,
            self.identity,
            self.change_type.value,
            self.field,
            self.old_hash,
            self.new_hash,
            self.partition,
        ]


@dataclass
class ReconciliationResult:
    """
    Output of one diff pass
    """

    snapshot: Dict[str, StoredRecord]
    events: List[ChangeEvent]
    counts: Dict[ChangeType, int]
    skipped: int = 0

    def snapshot_rows(self) -> List[StoredRecord]:
        return list(self.snapshot.values())

    def count(self, change_type: ChangeType) -> int:
        return self.counts.get(change_type, 0)

    def summary_text(self) -> str:
        return ", ".join(
            f"{change_type.value}={self.count(change_type)}"
            for change_type in ChangeType
        )


@dataclass
class RunSummary:
    """
    One pipeline execution, written as a RUNS row
    """

    run_id: str
    start_time: str
    script: str
    version: str
    end_time: str = ""
    grade_count: int = 0
    match_count: int = 0
    errors: int = 0
    status: str = "running"
    note: str = ""
    changes: Optional[Dict[ChangeType, int]] = None

    def to_row(self) -> List[Any]:
        note = f"status={self.status}"
        if self.note:
            note += f"; {self.note}"
        return [
            self.run_id,
            self.start_time,
            self.end_time,
            self.script,
            self.version,
            self.grade_count,
            self.match_count,
            self.errors,
            note,
        ]
