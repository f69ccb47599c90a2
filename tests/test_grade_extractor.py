"""Grade selection and record array detection."""

import pytest

from extractors import GradeExtractor


@pytest.fixture
def extractor():
    return GradeExtractor()


def test_bare_list_is_the_array(extractor):
    assert extractor.extract_array([1, 2]) == [1, 2]


@pytest.mark.parametrize("key", ["matches", "data", "items", "rows"])
def test_preferred_keys(extractor, key):
    assert extractor.extract_array({"meta": {}, key: [{"a": 1}]}) == [{"a": 1}]


def test_preferred_key_beats_earlier_list(extractor):
    payload = {"other": [0], "rows": [1], "matches": [2]}
    assert extractor.extract_array(payload) == [2]


def test_first_list_valued_key_as_fallback(extractor):
    payload = {"count": 2, "grades": [{"id": 1}], "later": [3]}
    assert extractor.extract_array(payload) == [{"id": 1}]


@pytest.mark.parametrize("payload", [{"a": 1}, "text", None, 5])
def test_no_array(extractor, payload):
    assert extractor.extract_array(payload) is None


@pytest.mark.parametrize(
    "grade,expected",
    [
        ({"gradeId": 71}, "71"),
        ({"gradeID": "72"}, "72"),
        ({"gradeid": 73}, "73"),
        ({"grade_id": 74}, "74"),
        ({"id": 75}, "75"),
        ({"Id": 76}, "76"),
        ({"ID": 77}, "77"),
        ({"grade": {"id": 78}}, "78"),
        ({"grade": {"gradeId": 79}}, "79"),
        ({"GradeId": 80}, "80"),
    ],
)
def test_grade_id_aliases(extractor, grade, expected):
    assert extractor.grade_id(grade) == expected


@pytest.mark.parametrize(
    "grade,expected",
    [
        ({"seasonid": 19}, "19"),
        ({"seasonId": "20"}, "20"),
        ({"season": {"id": 21}}, "21"),
        ({}, ""),
    ],
)
def test_season_id_aliases(extractor, grade, expected):
    assert extractor.season_id(grade) == expected


def test_select_drops_unidentified_and_duplicates(extractor):
    grades = [{"id": 1, "seasonId": 19}, {"name": "no id"}, {"gradeId": 1}, {"id": 2}]

    selected = extractor.select(grades)

    assert [g.grade_id for g in selected] == ["1", "2"]
    assert selected[0].season_id == "19"


def test_select_applies_filter(extractor):
    grades = [{"id": 1}, {"id": 2}, {"id": 3}]

    selected = extractor.select(grades, ["3", " 1 "])

    assert [g.grade_id for g in selected] == ["1", "3"]
