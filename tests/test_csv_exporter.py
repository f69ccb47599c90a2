"""CSV export sink."""

import csv

from exporters import CsvExporter, unique_fields


def read_csv(path):
    with open(path, newline="", encoding="utf-8") as handle:
        return list(csv.reader(handle))


def test_header_is_union_in_first_seen_order():
    rows = [{"a": 1, "b": 2}, {"c": 3, "a": 4}]
    assert unique_fields(rows) == ["a", "b", "c"]


def test_grade_file_layout(tmp_path):
    exporter = CsvExporter(str(tmp_path))
    rows = [
        {"match_id": "1", "live": True, "score": None},
        {"match_id": "2", "venue": "Hazelaarweg"},
    ]

    path = exporter.write_grade("11", rows)

    assert path == tmp_path / "Grade_11.csv"
    assert read_csv(path) == [
        ["match_id", "live", "score", "venue"],
        ["1", "true", "", ""],
        ["2", "", "", "Hazelaarweg"],
    ]


def test_master_and_combined_copy(tmp_path):
    combined = tmp_path / "exports" / "matches.csv"
    exporter = CsvExporter(str(tmp_path / "out"), combined_path=str(combined))
    rows = [{"match_id": "7", "home": "VRA"}]

    assert exporter.write_master(rows) == tmp_path / "out" / "MASTER.csv"
    assert exporter.write_combined(rows) == combined
    assert read_csv(combined) == [["match_id", "home"], ["7", "VRA"]]


def test_no_combined_path_configured(tmp_path):
    assert CsvExporter(str(tmp_path)).write_combined([{"a": 1}]) is None


def test_empty_rows_write_nothing(tmp_path):
    assert CsvExporter(str(tmp_path)).write_grade("3", []) is None
    assert not (tmp_path / "Grade_3.csv").exists()


def test_identifier_like_values_stay_text(tmp_path):
    path = CsvExporter(str(tmp_path)).write_master([{"match_id": "007", "n": 1.5}])
    assert read_csv(path)[1] == ["007", "1.5"]
