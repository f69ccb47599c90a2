"""Canonical string and content hash."""

import hashlib

from extractors import to_text
from reconciliation import canonical_string, content_hash


def test_canonical_string_sorts_keys_and_is_compact():
    assert canonical_string({"b": "2", "a": "1"}) == '{"a":"1","b":"2"}'


def test_values_are_coerced_to_text():
    assert canonical_string({"n": 3, "flag": True, "none": None}) == (
        '{"flag":"true","n":"3","none":""}'
    )


def test_hash_is_sha256_of_canonical_string():
    values = {"match_id": "1", "home_name": "A"}
    expected = hashlib.sha256(canonical_string(values).encode("utf-8")).hexdigest()
    assert content_hash(values) == expected
    assert len(content_hash(values)) == 64


def test_hash_independent_of_key_order():
    assert content_hash({"a": "1", "b": "2"}) == content_hash({"b": "2", "a": "1"})


def test_hash_changes_with_value():
    assert content_hash({"score_text": "1-0"}) != content_hash({"score_text": "2-0"})


def test_to_text_coercion():
    assert to_text(None) == ""
    assert to_text(False) == "false"
    assert to_text(12) == "12"
    assert to_text(1.5) == "1.5"
    assert to_text({"b": 1, "a": [1, 2]}) == '{"a":[1,2],"b":1}'
    assert to_text("  kept  ") == "  kept  "
