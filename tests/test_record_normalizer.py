"""Record normalizer and the alias rules of the schema-compatibility contract."""

import json

import pytest

from extractors import ExtractionConfig, RecordNormalizer, parse_path


def build_entity(path, value):
    """Nested entity holding value at a dotted/indexed path."""
    current = value
    for token in reversed(parse_path(path)):
        if isinstance(token, int):
            current = [{} for _ in range(token)] + [current]
        else:
            current = {token: current}
    return current


ALIAS_CASES = [
    (rule.logical_name, path)
    for rule in ExtractionConfig.rule_table().values()
    for path in rule.candidates
]


@pytest.fixture
def normalizer():
    return RecordNormalizer()


@pytest.mark.parametrize(
    "logical_name,path", ALIAS_CASES, ids=[f"{n}:{p}" for n, p in ALIAS_CASES]
)
def test_every_alias_resolves(normalizer, logical_name, path):
    entity = build_entity(path, "VALUE-42")

    projection = normalizer.hash_projection(entity, "fallback-grade")

    assert projection[logical_name] == "VALUE-42"


@pytest.mark.parametrize("path", ExtractionConfig.MATCH_ID.candidates)
def test_every_identity_alias(normalizer, path):
    assert normalizer.identity(build_entity(path, 991)) == "991"


def test_alias_order_first_non_empty_wins(normalizer):
    entity = {"matchId": "", "match_id": "  ", "id": 7}
    assert normalizer.identity(entity) == "7"

    entity = {"matchId": 1, "id": 2}
    assert normalizer.identity(entity) == "1"


def test_grade_id_falls_back_to_partition(normalizer):
    projection = normalizer.hash_projection({"id": 5}, "134")
    assert projection["grade_id"] == "134"
    # a match's own id is never taken as its grade
    assert projection["match_id"] == "5"


def test_projection_covers_all_hash_fields(normalizer):
    projection = normalizer.hash_projection({}, "")
    assert set(projection) == set(ExtractionConfig.hash_field_names())
    assert all(value == "" for value in projection.values())


def test_flatten_serializes_composites(normalizer):
    entity = {
        "matchId": 1,
        "homeTeam": {"name": "VRA", "id": 3},
        "umpires": ["x", "y"],
        "venue": None,
        "live": False,
    }

    flat = normalizer.flatten(entity)

    assert flat["matchId"] == 1
    assert json.loads(flat["homeTeam"]) == {"name": "VRA", "id": 3}
    assert flat["umpires"] == '["x","y"]'
    assert flat["venue"] == ""
    assert flat["live"] is False


def test_flatten_non_mapping(normalizer):
    assert normalizer.flatten("raw") == {"value": "raw"}


def test_normalize_builds_record(normalizer):
    entity = {
        "matchId": 10,
        "homeTeam": {"name": "A"},
        "awayTeam": {"name": "B"},
        "score": {"home": 2, "away": 1},
    }

    record = normalizer.normalize(entity, "11", "19")

    assert record.identity == "10"
    assert record.partition == "11"
    assert record.fields["_grade"] == "11"
    assert record.fields["_season"] == "19"
    assert record.hash_source["home_name"] == "A"
    assert record.hash_source["away_name"] == "B"
    assert record.hash_source["home_score"] == "2"
    assert record.hash_source["grade_id"] == "11"


def test_normalize_without_identity(normalizer):
    record = normalizer.normalize({"home": "A"}, "11")
    assert record.identity == ""


def test_indexed_team_names(normalizer):
    entity = {"teams": [{"name": "Home"}, {"name": "Away"}]}
    projection = normalizer.hash_projection(entity)
    assert projection["home_name"] == "Home"
    assert projection["away_name"] == "Away"
