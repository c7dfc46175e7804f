# tests/test_conditions.py
import pytest

from conditions import between_condition, position_condition, trim_rule
from trim_types import Edge, TrimType


def test_position_condition_shape():
    cond = position_condition(TrimType.BEFORE_LAST, "to", skip=["x"])
    assert cond == {
        "type": "beforeLast",
        "words": ["to"],
        "options": {"caseSensitive": False, "noSpaces": False, "skip": ["x"]},
    }

def test_position_condition_rejects_non_positional_types():
    with pytest.raises(ValueError):
        position_condition("between", ["to"])
    with pytest.raises(ValueError):
        position_condition("around", ["to"])

def test_between_condition_regex_string():
    cond = between_condition(["from", "since"], "to")
    assert cond["type"] == "between"
    assert cond["regex"] == "/(?<= from )(.*)(?= to )|(?<= since )(.*)(?= to )/gi"
    assert cond["leftWords"] == ["from", "since"]
    assert cond["rightWords"] == ["to"]

def test_between_condition_without_spaces_and_case():
    cond = between_condition("[", "]", case_sensitive=True, no_spaces=True)
    assert cond["regex"] == r"/(?<=\[)(.*)(?=\])/g"
    assert cond["options"]["caseSensitive"] is True

def test_trim_rule_shape():
    rule = trim_rule("route", [position_condition("after", "to")])
    assert rule["type"] == "trim"
    assert rule["name"] == "route"
    assert len(rule["rules"]) == 1

def test_trim_type_parse():
    assert TrimType.parse("afterFirst") is TrimType.AFTER_FIRST
    assert TrimType.parse(TrimType.BETWEEN) is TrimType.BETWEEN
    assert TrimType.parse("nope") is None
    assert TrimType.parse(None) is None

def test_edge_dict_round_trip_uses_pipeline_keys():
    e = Edge("after", 4, 6, 3, 0.99, "abc", "abc", "extract-trim")
    d = e.to_dict()
    assert d["sourceText"] == "abc" and d["utteranceText"] == "abc"
    assert "source_text" not in d
    assert Edge.from_dict(d) == e
    assert Edge.from_dict({"start": 1, "end": 2, "source_text": "ab"}).utterance_text == "ab"
