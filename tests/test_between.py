# tests/test_between.py
import pytest
import regex

from conditions import between_condition, compile_pattern
from trim_extractor import match_between


def test_digit_pattern_is_scanned_exhaustively():
    cond = {"type": "between", "regex": r"\d"}
    edges = match_between("a 1 b 2 c", cond)
    assert [e.source_text for e in edges] == ["1", "2"]
    assert [(e.start, e.end) for e in edges] == [(2, 2), (6, 6)]
    for e in edges:
        assert e.type == "between"
        assert e.accuracy == 1.0
        assert e.len == e.end - e.start + 1 == len(e.source_text)

def test_same_edges_on_every_call():
    cond = {"type": "between", "regex": compile_pattern(r"\d")}
    first = match_between("a 1 b 2 c", cond)
    assert match_between("a 1 b 2 c", cond) == first
    assert match_between("a 1 b 2 c", cond) == first

def test_between_words_maps_back_to_original_offsets():
    text = "from Barcelona to Madrid"
    edges = match_between(text, between_condition("from", "to"))
    assert len(edges) == 1
    e = edges[0]
    assert e.source_text == "Barcelona"
    assert text[e.start:e.end + 1] == "Barcelona"
    assert (e.start, e.end) == (5, 13)

def test_between_is_greedy_up_to_the_last_right_word():
    edges = match_between("from a to b to c", between_condition("from", "to"))
    assert [e.source_text for e in edges] == ["a to b"]

def test_case_sensitive_between():
    text = "From Barcelona to Madrid"
    assert match_between(text, between_condition("from", "to")) != []
    assert match_between(text, between_condition("from", "to", case_sensitive=True)) == []

def test_skip_list_applies_to_between_matches():
    cond = between_condition("from", "to", skip=["barcelona"])
    assert match_between("from Barcelona to Madrid", cond) == []

def test_empty_matches_are_not_emitted():
    cond = {"type": "between", "regex": "x*"}
    assert match_between("abc", cond) == []
    edges = match_between("axxb", cond)
    assert [(e.source_text, e.start, e.end) for e in edges] == [("xx", 1, 2)]

def test_missing_pattern_yields_nothing():
    assert match_between("a 1 b", {"type": "between"}) == []

# -------------------------
# Pattern compilation
# -------------------------
def test_slashed_pattern_flags():
    rx = compile_pattern("/abc/gi")
    assert rx.pattern == "abc"
    assert rx.flags & regex.IGNORECASE
    assert not compile_pattern("/abc/g").flags & regex.IGNORECASE

def test_case_option_on_plain_string():
    assert compile_pattern("abc", case_sensitive=False).flags & regex.IGNORECASE
    assert not compile_pattern("abc").flags & regex.IGNORECASE

def test_compiled_pattern_passes_through():
    rx = regex.compile("abc")
    assert compile_pattern(rx) is rx

def test_invalid_patterns_raise():
    with pytest.raises(regex.error):
        compile_pattern("/(/g")
    with pytest.raises(regex.error):
        compile_pattern("/abc/q")
    with pytest.raises(regex.error):
        match_between("a b", {"type": "between", "regex": "("})

def test_enclosing_slashes_mean_serialized_form():
    assert compile_pattern("/usr/").pattern == "usr"
    assert compile_pattern("//usr//").pattern == "/usr/"
    assert compile_pattern("usr/").pattern == "usr/"
