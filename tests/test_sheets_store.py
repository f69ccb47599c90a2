"""Google Sheets store against an in-memory fake of the Sheets v4 service."""

from dataclasses import replace

import pytest
from googleapiclient.errors import HttpError

from configurations import ConfigFactory, SheetsConfig
from database import GoogleSheetsStore, StoreFactory, SqlTabularStore
from exceptions import StoreConnectionError, TabularStoreError


class FakeRequest:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    def execute(self):
        if self.error is not None:
            raise self.error
        return self.result


class FakeResp(dict):
    def __init__(self, status):
        super().__init__(status=str(status))
        self.status = status
        self.reason = "error"


def split_range(a1):
    title, _, cells = a1.partition("!")
    return title.strip("'").replace("''", "'"), cells


class FakeValues:
    def __init__(self, book):
        self.book = book

    def get(self, spreadsheetId, range):
        title, cells = split_range(range)
        rows = self.book.tabs[title]
        if cells == "1:1":
            rows = rows[:1]
        return FakeRequest({"values": [list(r) for r in rows]} if rows else {})

    def clear(self, spreadsheetId, range, body):
        title, _ = split_range(range)
        self.book.tabs[title] = []
        self.book.calls.append(("clear", title))
        return FakeRequest({})

    def append(self, spreadsheetId, range, valueInputOption, insertDataOption, body):
        title, _ = split_range(range)
        self.book.tabs[title].extend(body["values"])
        self.book.calls.append(("append", title))
        return FakeRequest({})

    def update(self, spreadsheetId, range, valueInputOption, body):
        title, _ = split_range(range)
        rows = self.book.tabs[title]
        if rows:
            rows[0] = body["values"][0]
        else:
            rows.append(body["values"][0])
        return FakeRequest({})


class FakeSpreadsheets:
    def __init__(self, book):
        self.book = book

    def get(self, spreadsheetId, fields=None):
        if self.book.error is not None:
            return FakeRequest(error=self.book.error)
        sheets = [
            {"properties": {"title": title, "sheetId": index}}
            for index, title in enumerate(self.book.tabs)
        ]
        return FakeRequest({"sheets": sheets})

    def batchUpdate(self, spreadsheetId, body):
        for request in body["requests"]:
            if "addSheet" in request:
                self.book.tabs[request["addSheet"]["properties"]["title"]] = []
            if "insertDimension" in request:
                sheet_id = request["insertDimension"]["range"]["sheetId"]
                title = list(self.book.tabs)[sheet_id]
                self.book.tabs[title].insert(0, [])
        return FakeRequest({})

    def values(self):
        return FakeValues(self.book)


class FakeService:
    def __init__(self, tabs=None, error=None):
        self.tabs = tabs if tabs is not None else {}
        self.error = error
        self.calls = []

    def spreadsheets(self):
        return FakeSpreadsheets(self)


CONFIG = SheetsConfig(spreadsheet_id="sheet-1")


def store_with(tabs=None, error=None):
    service = FakeService(tabs, error)
    return GoogleSheetsStore(CONFIG, service=service), service


def test_requires_spreadsheet_id():
    with pytest.raises(StoreConnectionError):
        GoogleSheetsStore(SheetsConfig())


def test_absent_tab_reads_as_none():
    store, _ = store_with()
    assert store.read_rows("SNAPSHOT") is None


def test_replace_is_clear_then_append():
    store, service = store_with({"master": [["old"], ["x"]]})

    store.replace_rows("MASTER", ["match_id", "live"], [["1", True], ["2", None]])

    assert service.tabs == {"master": [["match_id", "live"], ["1", "true"], ["2", ""]]}
    assert service.calls == [("clear", "master"), ("append", "master")]
    assert store.atomic_replace is False


def test_read_rows_splits_header():
    store, _ = store_with({"SNAPSHOT": [["match_id", "_hash"], ["1", "h"]]})

    data = store.read_rows("snapshot")

    assert data.header == ["match_id", "_hash"]
    assert data.records() == [{"match_id": "1", "_hash": "h"}]


def test_empty_tab_reads_as_empty_table():
    store, _ = store_with({"SNAPSHOT": []})
    assert store.read_rows("SNAPSHOT").is_empty


def test_ensure_header_creates_tab():
    store, service = store_with()

    assert store.ensure_header("RUNS", ["run_id", "note"]) is True
    assert service.tabs["RUNS"] == [["run_id", "note"]]


def test_ensure_header_keeps_existing_first_row():
    store, service = store_with({"Other": [], "LOG": [["r1", "t1"], ["r2", "t2"]]})

    assert store.ensure_header("log", ["run_id", "timestamp"]) is True
    assert service.tabs["LOG"] == [["run_id", "timestamp"], ["r1", "t1"], ["r2", "t2"]]
    assert store.ensure_header("LOG", ["run_id", "timestamp"]) is False


def test_tab_titles_are_quoted():
    store, service = store_with({"Grade's": []})
    store.append_rows("Grade's", [["1"]])
    assert service.tabs["Grade's"] == [["1"]]


@pytest.mark.parametrize(
    "status, expected",
    [(403, StoreConnectionError), (500, TabularStoreError)],
)
def test_http_errors_are_mapped(status, expected):
    store, _ = store_with(error=HttpError(FakeResp(status), b"denied"))
    with pytest.raises(expected):
        store.list_tables()


def test_factory_picks_backend(tmp_path):
    testing = ConfigFactory.testing(output_directory=str(tmp_path))
    assert isinstance(StoreFactory.create_tabular_store(testing), SqlTabularStore)

    sheets = replace(testing, sheets=SheetsConfig(spreadsheet_id="abc"))
    store = StoreFactory.create_tabular_store(sheets)
    assert isinstance(store, GoogleSheetsStore)
    assert store.describe() == "GoogleSheetsStore(abc)"
