"""Snapshot adapter and run ledger."""

import pytest

from configurations import LoadFailurePolicy
from database import RunLedger, SnapshotStore
from exceptions import SnapshotLoadError, SnapshotPersistError, TabularStoreError
from logger import LogEntry, SheetConstants
from reconciliation import ChangeEvent, ChangeType, RunSummary


class BrokenStore:
    """Every call fails like an unreachable backend."""

    def read_rows(self, name):
        raise TabularStoreError("backend down")

    def replace_rows(self, name, header, rows):
        raise TabularStoreError("backend down")

    def ensure_header(self, name, header):
        raise TabularStoreError("backend down")

    def append_rows(self, name, rows):
        raise TabularStoreError("backend down")


def stored(match_id, **extra):
    row = {
        "match_id": match_id,
        "home": "A",
        "_hash": "h" + match_id,
        "_last_changed_at": "2024-05-01T10:00:00Z",
        "_last_change_type": "created",
        "_active": "1",
    }
    row.update(extra)
    return row


def test_missing_table_is_first_run(sql_store):
    assert SnapshotStore(sql_store).load() == {}


def test_persist_then_load(sql_store):
    snapshots = SnapshotStore(sql_store)
    snapshots.persist([stored("1"), stored("2", away="B")])

    loaded = snapshots.load()

    assert list(loaded) == ["1", "2"]
    assert loaded["1"]["away"] == ""
    assert loaded["2"]["away"] == "B"
    assert sql_store.read_rows("SNAPSHOT").header[:2] == ["match_id", "home"]


def test_persist_fully_replaces(sql_store):
    snapshots = SnapshotStore(sql_store)
    snapshots.persist([stored("1"), stored("2")])
    snapshots.persist([stored("3")])

    assert list(snapshots.load()) == ["3"]


def test_empty_persist_keeps_bookkeeping_header(sql_store):
    SnapshotStore(sql_store).persist([])
    assert sql_store.read_rows("SNAPSHOT").header == [
        "match_id",
        "_hash",
        "_last_changed_at",
        "_last_change_type",
        "_active",
    ]


def test_rows_without_identity_are_ignored_and_last_duplicate_wins(sql_store):
    sql_store.replace_rows(
        "SNAPSHOT",
        ["match_id", "_hash"],
        [["1", "old"], ["", "x"], ["  ", "y"], ["1", "new"]],
    )

    loaded = SnapshotStore(sql_store).load()

    assert list(loaded) == ["1"]
    assert loaded["1"]["_hash"] == "new"


def test_missing_identity_column_is_an_error(sql_store):
    sql_store.replace_rows("SNAPSHOT", ["id", "_hash"], [["1", "h"]])
    with pytest.raises(SnapshotLoadError):
        SnapshotStore(sql_store).load()


def test_unreachable_store_fails_by_default():
    with pytest.raises(SnapshotLoadError):
        SnapshotStore(BrokenStore(), load_failure_policy=LoadFailurePolicy.FAIL).load()


def test_unreachable_store_as_first_run():
    snapshots = SnapshotStore(
        BrokenStore(), load_failure_policy=LoadFailurePolicy.FIRST_RUN
    )
    assert snapshots.load() == {}


def test_write_failures_are_persist_errors():
    snapshots = SnapshotStore(BrokenStore())
    event = ChangeEvent("r", "t", "1", ChangeType.CREATED, "", "h", "11")

    with pytest.raises(SnapshotPersistError):
        snapshots.persist([stored("1")])
    with pytest.raises(SnapshotPersistError):
        snapshots.append_changes([event])


def test_append_changes_installs_header_and_appends(sql_store):
    snapshots = SnapshotStore(sql_store)
    first = ChangeEvent("r1", "t1", "1", ChangeType.CREATED, "", "h1", "11")
    second = ChangeEvent("r2", "t2", "1", ChangeType.DELETED, "h1", "", "11")

    assert snapshots.append_changes([first]) == 1
    assert snapshots.append_changes([second]) == 1
    assert snapshots.append_changes([]) == 0

    data = sql_store.read_rows("CHANGES")
    assert data.header == SheetConstants.CHANGES_HEADER
    assert data.rows == [
        ["r1", "t1", "1", "created", "*", "", "h1", "11"],
        ["r2", "t2", "1", "deleted", "*", "h1", "", "11"],
    ]


def test_ledger_headers_written_once(sql_store):
    ledger = RunLedger(sql_store)

    assert ledger.ensure_headers() == ["RUNS", "LOG", "CHANGES"]
    assert ledger.ensure_headers() == []


def test_ledger_appends_runs_and_log(sql_store):
    ledger = RunLedger(sql_store)
    summary = RunSummary(
        run_id="r1",
        start_time="s",
        script="fetchmatches-master",
        version="1.0.0",
        end_time="e",
        grade_count=2,
        match_count=5,
        errors=1,
        status="partial",
    )
    entry = LogEntry("r1", "t", "fetchmatches-master", "run", "start", "", "INFO", "go")

    ledger.append_run(summary)
    assert ledger.append_log([entry]) == 1
    assert ledger.append_log([]) == 0

    runs = sql_store.read_rows("RUNS")
    assert runs.header == SheetConstants.RUNS_HEADER
    assert runs.rows == [
        ["r1", "s", "e", "fetchmatches-master", "1.0.0", "2", "5", "1", "status=partial"]
    ]
    assert sql_store.read_rows("LOG").rows[0][-2:] == ["go", ""]
