"""Attribute Pairs — lookup, flat map, nuke-and-set, and the single-pair codec.

Tests:
    - encode_pair/decode_pair are inverses and keep the stored field names
    - lookup() returns the first match, "" when absent
    - to_flat_map() keeps the last value of a repeated key
    - replace_matching() keeps slot position, appends new keys, is idempotent
"""

import json

import pytest

from carton.core.errors import FieldDecodeError
from carton.core.pairs import Pair, PairList, decode_pair, encode_pair


def _pairs(*kv) -> PairList:
    return PairList(Pair(key=k, value=v) for k, v in kv)


@pytest.mark.parametrize("key,value", [
    ("domain", "megambox.com"),
    ("empty", ""),
    ("quoted", 'say "hi"\nbye'),
    ("unicode", "ação"),
])
def test_pair_round_trip(key, value):
    pair = Pair(key=key, value=value)
    assert decode_pair(encode_pair(pair)) == pair


def test_encoded_pair_uses_key_and_value_names():
    assert json.loads(encode_pair(Pair(key="a", value="b"))) == {"key": "a", "value": "b"}


def test_decode_pair_ignores_unknown_fields():
    assert decode_pair('{"key": "a", "value": "b", "extra": 1}') == Pair(key="a", value="b")


@pytest.mark.parametrize("text", [
    "not json",
    "[]",
    '{"value": "no key"}',
    '{"key": 5, "value": "x"}',
])
def test_decode_pair_rejects_malformed(text):
    with pytest.raises(FieldDecodeError) as exc:
        decode_pair(text)
    assert exc.value.shape == "pair"


def test_lookup_returns_first_match():
    pairs = _pairs(("k", "first"), ("k", "second"))
    assert pairs.lookup("k") == "first"


def test_lookup_absent_key_returns_empty_string():
    assert _pairs(("a", "1")).lookup("missing") == ""
    assert PairList().lookup("anything") == ""


def test_flat_map_last_write_wins():
    pairs = _pairs(("k", "first"), ("x", "1"), ("k", "second"))
    assert pairs.to_flat_map() == {"k": "second", "x": "1"}


def test_replace_matching_keeps_position_of_first_removal():
    pairs = _pairs(("a", "1"), ("status", "old"), ("b", "2"), ("status", "older"))
    pairs.replace_matching({"status": ["new"]})
    assert [(p.key, p.value) for p in pairs] == [
        ("a", "1"), ("status", "new"), ("b", "2"),
    ]


def test_replace_matching_appends_absent_keys():
    pairs = _pairs(("a", "1"))
    pairs.replace_matching({"status": ["running"], "lastsuccessstatusupdate": ["t"]})
    assert [(p.key, p.value) for p in pairs] == [
        ("a", "1"), ("status", "running"), ("lastsuccessstatusupdate", "t"),
    ]


def test_replace_matching_inserts_every_value():
    pairs = _pairs(("tag", "x"), ("a", "1"))
    pairs.replace_matching({"tag": ["y", "z"]})
    assert [(p.key, p.value) for p in pairs] == [
        ("tag", "y"), ("tag", "z"), ("a", "1"),
    ]


def test_replace_matching_adjacent_keys_keep_their_order():
    pairs = _pairs(("a", "1"), ("b", "2"), ("c", "3"))
    pairs.replace_matching({"b": ["B"], "a": ["A"]})
    assert [(p.key, p.value) for p in pairs] == [
        ("a", "A"), ("b", "B"), ("c", "3"),
    ]


def test_replace_matching_is_idempotent():
    updates = {"status": ["running"], "lastsuccessstatusupdate": ["18 Oct 26 10:00 UTC"]}
    once = _pairs(("a", "1"), ("status", "old"))
    once.replace_matching(updates)
    twice = _pairs(("a", "1"), ("status", "old"))
    twice.replace_matching(updates)
    twice.replace_matching(updates)
    assert once == twice


def test_replace_matching_rejects_bare_string_values():
    pairs = _pairs(("a", "1"), ("status", "old"))
    with pytest.raises(TypeError):
        pairs.replace_matching({"status": "running"})
    # nothing was touched
    assert [(p.key, p.value) for p in pairs] == [("a", "1"), ("status", "old")]


def test_to_encoded_strings_preserves_order():
    pairs = _pairs(("z", "1"), ("a", "2"))
    decoded = [decode_pair(s) for s in pairs.to_encoded_strings()]
    assert [p.key for p in decoded] == ["z", "a"]
