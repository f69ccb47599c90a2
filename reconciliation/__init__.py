from .diff_engine import SnapshotDiffEngine, is_active
from .hashing import canonical_string, content_hash
from .models import (
    ChangeEvent,
    ChangeType,
    ReconciliationResult,
    Record,
    RunSummary,
    StoredRecord,
)

__all__ = [
    "SnapshotDiffEngine",
    "is_active",
    "canonical_string",
    "content_hash",
    "ChangeEvent",
    "ChangeType",
    "ReconciliationResult",
    "Record",
    "RunSummary",
    "StoredRecord",
]
