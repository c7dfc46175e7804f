# -*- coding: utf-8 -*-
# trim_extractor.py

"""
TRIM EXTRACTOR
==============

What it does
------------
Extracts the text *surrounding* known marker words. Each "trim" rule carries one or
more conditions; every condition yields candidate spans (edges) positioned relative
to anchors found in the utterance:

  • before / beforeFirst / beforeLast   -> text preceding every / the first / the last anchor
  • after  / afterFirst  / afterLast    -> text following every / the first / the last anchor
  • between                             -> every match of a pattern (usually "between L and R")

How it extracts
---------------
1) Rules whose type is "trim" are selected from record["nerRules"].
2) Position conditions: each word is located (space-bounded, case-folded unless
   caseSensitive) and the strategy table turns the anchors into spans.
   Between conditions: the pattern is scanned exhaustively over " " + text + " ".
3) Candidates whose text is in the condition's skip list are dropped.
4) New edges join any edges already on the record, are stable-sorted by start and
   handed to the overlap reducer.

Edges use inclusive start/end offsets; positional edges score 0.99, between edges 1.0.

Configuration
-------------
    TrimConfig(
        entity_name="extract-trim",     # edge.entity and registry key prefix
        rule_type="trim",
        default_locale="en",
        keep_overlaps=False,            # passed to the reducer
        positional_accuracy=0.99,
        between_accuracy=1.0,
    )

Typical usage
-------------
    from trim_extractor import TrimExtractor
    from conditions import trim_rule, position_condition

    record = {
        "text": "the quick brown fox",
        "nerRules": [trim_rule("animal", [position_condition("after", ["quick"])])],
    }
    TrimExtractor().run(record)["edges"]   # [Edge(type='after', text='brown fox', ...)]

Only record["edges"] is written; the record itself is returned. Edges left there by
earlier extractors (plain dicts) are sorted and reduced alongside ours but never rebuilt.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Mapping, MutableMapping, Optional, Sequence, Tuple
import regex as re

import logging
logger = logging.getLogger(__name__)

from conditions import compile_pattern
from reduce_edges import reduce_edges
from registry import LocaleRegistry
from trim_types import AnchorPosition, Edge, TrimType, edge_field

Reducer = Callable[[List[Any], bool], List[Any]]

# =========================
# Config
# =========================
@dataclass(frozen=True)
class TrimConfig:
    entity_name: str = "extract-trim"
    rule_type: str = "trim"
    default_locale: str = "en"
    keep_overlaps: bool = False
    positional_accuracy: float = 0.99
    between_accuracy: float = 1.0

DEFAULT_CONFIG = TrimConfig()

def _options(condition: Mapping[str, Any]) -> Mapping[str, Any]:
    return condition.get("options") or {}

# =========================
# Word location
# =========================
def _word_pattern(word: str, no_spaces: bool) -> str:
    w = re.escape(word)
    if no_spaces:
        return w
    # space on both sides, leading only, trailing only (tried in that order)
    return f" {w} | {w}|{w} "

def find_word(
    utterance: str,
    word: str,
    case_sensitive: bool = False,
    no_spaces: bool = False,
) -> List[AnchorPosition]:
    """All non-overlapping occurrences of `word`, left to right, as half-open (start, end)."""
    if not word:
        return []
    rx = re.compile(_word_pattern(word, no_spaces), 0 if case_sensitive else re.IGNORECASE)
    return [m.span() for m in rx.finditer(utterance)]

# =========================
# Skip list
# =========================
def must_skip(text: str, condition: Mapping[str, Any]) -> bool:
    opts = _options(condition)
    skip = opts.get("skip") or []
    if not skip:
        return False
    if opts.get("caseSensitive"):
        return text in skip
    folded = text.casefold()
    return any(s.casefold() == folded for s in skip)

def _drop_skipped(edges: List[Edge], condition: Mapping[str, Any]) -> List[Edge]:
    return [e for e in edges if not must_skip(e.utterance_text, condition)]

# =========================
# Span building (positional strategies)
# =========================
# strategy -> (which anchors, which side)
_SPAN_TABLE: Dict[TrimType, Tuple[str, str]] = {
    TrimType.BEFORE:       ("all",   "before"),
    TrimType.BEFORE_FIRST: ("first", "before"),
    TrimType.BEFORE_LAST:  ("last",  "before"),
    TrimType.AFTER:        ("all",   "after"),
    TrimType.AFTER_FIRST:  ("first", "after"),
    TrimType.AFTER_LAST:   ("last",  "after"),
}

def _span_ranges(positions: Sequence[AnchorPosition], length: int, subset: str, side: str) -> List[Tuple[int, int]]:
    if subset == "first":
        anchors = list(positions[:1])
    elif subset == "last":
        anchors = list(positions[-1:])
    else:
        anchors = list(positions)

    out: List[Tuple[int, int]] = []
    if side == "before":
        # each region starts where the previous anchor ended
        prev_end = 0
        for start, end in anchors:
            out.append((prev_end, start))
            prev_end = end
    else:
        # each region stops where the next anchor starts
        for i, (start, end) in enumerate(anchors):
            stop = anchors[i + 1][0] if i + 1 < len(anchors) else length
            out.append((end, stop))
    return out

def _make_edge(utterance: str, start: int, end_pos: int, kind: TrimType, accuracy: float, entity: str) -> Edge:
    text = utterance[start:end_pos]
    return Edge(
        type=kind.value,
        start=start,
        end=end_pos - 1,
        len=len(text),
        accuracy=accuracy,
        source_text=text,
        utterance_text=text,
        entity=entity,
    )

def build_spans(
    utterance: str,
    positions: Sequence[AnchorPosition],
    trim_type: Any,
    config: TrimConfig = DEFAULT_CONFIG,
) -> List[Edge]:
    """Turn anchor positions into edges for one positional strategy; unknown strategies give []."""
    kind = TrimType.parse(trim_type)
    shape = _SPAN_TABLE.get(kind) if kind is not None else None
    if shape is None or not positions:
        return []
    subset, side = shape
    return [
        _make_edge(utterance, s, e, kind, config.positional_accuracy, config.entity_name)
        for s, e in _span_ranges(positions, len(utterance), subset, side)
    ]

# =========================
# Between (pattern) matching
# =========================
def iter_pattern_matches(rx, text: str) -> Iterator[Any]:
    """Non-overlapping, non-empty matches left to right."""
    for m in rx.finditer(text):
        # finditer steps past empty matches itself; they carry no text so they are not emitted
        if m.end() > m.start():
            yield m

def match_between(
    utterance: str,
    condition: Mapping[str, Any],
    config: TrimConfig = DEFAULT_CONFIG,
) -> List[Edge]:
    if condition.get("regex") is None:
        return []
    opts = _options(condition)
    rx = compile_pattern(condition["regex"], opts.get("caseSensitive"))
    edges: List[Edge] = []
    for m in iter_pattern_matches(rx, f" {utterance} "):
        text = m.group(0)
        edges.append(Edge(
            type=TrimType.BETWEEN.value,
            start=m.start() - 1,
            end=m.end() - 2,
            len=len(text),
            accuracy=config.between_accuracy,
            source_text=text,
            utterance_text=text,
            entity=config.entity_name,
        ))
    return _drop_skipped(edges, condition)

# =========================
# Rule selection
# =========================
def select_rules(record: Mapping[str, Any], rule_type: str = DEFAULT_CONFIG.rule_type) -> List[Mapping[str, Any]]:
    rules = record.get("nerRules")
    if not rules:
        return []
    return [r for r in rules if r.get("type") == rule_type]

def _utterance(record: Mapping[str, Any]) -> str:
    if record.get("text"):
        return record["text"]
    if "utterance" in record:
        return record["utterance"]
    return record["text"]  # KeyError when neither field is present

def _words(condition: Mapping[str, Any]) -> List[str]:
    words = condition.get("words") or []
    return [words] if isinstance(words, str) else list(words)

# =========================
# Extractor (orchestration + locale dispatch)
# =========================
class TrimExtractor:
    """
    Runs trim rules over an input record.

    `registry` maps "<entity_name>-<locale>" to locale-specific extractors (anything
    with a .get(key) method); `reducer` collapses the sorted edge list.
    """

    def __init__(
        self,
        registry: Optional[Any] = None,
        reducer: Reducer = reduce_edges,
        config: TrimConfig = DEFAULT_CONFIG,
        log: Optional[logging.Logger] = None,
    ):
        self.registry = registry if registry is not None else LocaleRegistry()
        self.reducer = reducer
        self.config = config
        self.name = config.entity_name
        self.log = log or logger

    def match(self, utterance: str, condition: Mapping[str, Any]) -> List[Edge]:
        opts = _options(condition)
        edges: List[Edge] = []
        for word in _words(condition):
            positions = find_word(
                utterance,
                word,
                case_sensitive=bool(opts.get("caseSensitive")),
                no_spaces=bool(opts.get("noSpaces")),
            )
            if positions:
                edges += build_spans(utterance, positions, condition.get("type"), self.config)
        return _drop_skipped(edges, condition)

    def extract_from_rule(self, utterance: str, rule: Mapping[str, Any]) -> List[Edge]:
        edges: List[Edge] = []
        for condition in rule.get("rules") or []:
            if TrimType.parse(condition.get("type")) is TrimType.BETWEEN:
                edges += match_between(utterance, condition, self.config)
            else:
                edges += self.match(utterance, condition)
        return edges

    def extract(self, record: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
        """Append this extractor's edges to record["edges"], sort, reduce; returns the same record."""
        rules = select_rules(record, self.config.rule_type)
        # edges from earlier extractors are kept as they came in
        edges: List[Any] = list(record.get("edges") or [])
        if rules:
            utterance = _utterance(record)
            for rule in rules:
                new_edges = self.extract_from_rule(utterance, rule)
                self.log.debug("trim: rule %r -> %r", rule.get("name"), [e.source_text for e in new_edges])
                edges += new_edges
        edges = sorted(edges, key=lambda e: edge_field(e, "start", 0))
        record["edges"] = self.reducer(edges, self.config.keep_overlaps)
        return record

    def resolve(self, locale: str) -> "TrimExtractor":
        found = self.registry.get(f"{self.name}-{locale}")
        if found is None:
            return self
        self.log.debug("trim: using %s for locale %s", type(found).__name__, locale)
        return found

    def run(self, record: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
        locale = record.get("locale") or self.config.default_locale
        return self.resolve(locale).extract(record)

# =========================
# Convenience entry
# =========================
def extract_trim(
    text: str,
    rules: Sequence[Mapping[str, Any]],
    locale: Optional[str] = None,
    config: TrimConfig = DEFAULT_CONFIG,
) -> List[Edge]:
    record: Dict[str, Any] = {"text": text, "nerRules": list(rules)}
    if locale:
        record["locale"] = locale
    return list(TrimExtractor(config=config).run(record)["edges"])
