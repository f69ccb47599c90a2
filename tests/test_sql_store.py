"""SQL tabular store against a SQLite file."""

from database import header_matches


def test_absent_table_reads_as_none(sql_store):
    assert sql_store.read_rows("SNAPSHOT") is None
    assert sql_store.find_table("SNAPSHOT") is None


def test_replace_then_read(sql_store):
    sql_store.replace_rows("MASTER", ["match_id", "home"], [["1", "A"], ["2", None]])
    sql_store.replace_rows("MASTER", ["match_id", "home"], [["3", True]])

    data = sql_store.read_rows("MASTER")

    assert data.header == ["match_id", "home"]
    assert data.rows == [["3", "true"]]
    assert data.records() == [{"match_id": "3", "home": "true"}]


def test_append_keeps_existing_rows(sql_store):
    sql_store.replace_rows("LOG", ["a"], [["1"]])
    sql_store.append_rows("LOG", [["2"], ["3"]])
    sql_store.append_rows("LOG", [])

    assert sql_store.read_rows("LOG").rows == [["1"], ["2"], ["3"]]


def test_tables_are_found_case_insensitively(sql_store):
    assert sql_store.ensure_table("Runs") == "Runs"
    assert sql_store.ensure_table("RUNS") == "Runs"
    assert sql_store.find_table("runs") == "Runs"
    assert sql_store.list_tables() == ["Runs"]


def test_ensure_header_on_new_table(sql_store):
    assert sql_store.ensure_header("RUNS", ["run_id", "note"]) is True
    assert sql_store.ensure_header("RUNS", ["RUN_ID ", "Note"]) is False
    assert sql_store.read_rows("RUNS").header == ["run_id", "note"]


def test_ensure_header_pushes_existing_first_row_down(sql_store):
    sql_store.replace_rows("CHANGES", ["r1", "x"], [["r2", "y"]])

    assert sql_store.ensure_header("CHANGES", ["run_id", "field"]) is True

    data = sql_store.read_rows("CHANGES")
    assert data.header == ["run_id", "field"]
    assert data.rows == [["r1", "x"], ["r2", "y"]]


def test_records_pad_short_rows(sql_store):
    sql_store.replace_rows("T", ["a", "b", "c"], [["1"]])
    assert sql_store.read_rows("T").records() == [{"a": "1", "b": "", "c": ""}]


def test_store_flags(sql_store):
    assert sql_store.atomic_replace is True
    assert sql_store.ping() is True
    assert sql_store.describe() == "SqlTabularStore(sqlite)"


def test_header_matching_is_a_prefix_comparison():
    assert header_matches([" Run_ID", "NOTE", "extra"], ["run_id", "note"])
    assert not header_matches(["run_id"], ["run_id", "note"])
    assert not header_matches(["run", "note"], ["run_id", "note"])
