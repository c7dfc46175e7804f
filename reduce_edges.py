# reduce_edges.py
"""
Overlap resolution for start-sorted edge lists.

Edges are either `Edge` records or dicts contributed by other extractors; dicts are
read through their keys and handed back unchanged.

Policy (keep_overlaps=False):
  • empty edges (len <= 0) never survive
  • overlapping edges compete: higher accuracy wins, then the longer span,
    then whichever was kept first
  • a candidate that beats every kept edge it overlaps replaces all of them

With keep_overlaps=True only exact duplicates are collapsed.
"""

from __future__ import annotations
import logging
from typing import Any, List, Sequence

from trim_types import edge_field

logger = logging.getLogger(__name__)


def _start(e: Any) -> int:
    return edge_field(e, "start", 0)

def _len(e: Any) -> int:
    return edge_field(e, "len", 0) or 0

def _end(e: Any) -> int:
    return edge_field(e, "end", _start(e) + _len(e) - 1)

def _is_empty(e: Any) -> bool:
    return _len(e) <= 0

def _overlaps(a: Any, b: Any) -> bool:
    # inclusive ends
    return _start(a) <= _end(b) and _start(b) <= _end(a)


def _beats(c: Any, k: Any) -> bool:
    ca, ka = float(edge_field(c, "accuracy", 0.0)), float(edge_field(k, "accuracy", 0.0))
    if abs(ca - ka) > 1e-9:
        return ca > ka
    return _len(c) > _len(k)


def _dedupe_key(e: Any):
    return (_start(e), _end(e), edge_field(e, "entity"), edge_field(e, "type"))


def reduce_edges(edges: Sequence[Any], keep_overlaps: bool = False) -> List[Any]:
    """Collapse a start-sorted edge list into the final set; inputs are not mutated."""
    kept: List[Any] = []
    if keep_overlaps:
        seen = set()
        for e in edges:
            if _is_empty(e) or _dedupe_key(e) in seen:
                continue
            seen.add(_dedupe_key(e))
            kept.append(e)
        return sorted(kept, key=_start)

    for c in edges:
        if _is_empty(c):
            continue
        clashes = [i for i, k in enumerate(kept) if _overlaps(c, k)]
        if not clashes:
            kept.append(c)
            continue
        if all(_beats(c, kept[i]) for i in clashes):
            logger.debug("reduce: %r replaces %d edge(s)", edge_field(c, "source_text", edge_field(c, "sourceText")), len(clashes))
            kept = [k for i, k in enumerate(kept) if i not in clashes]
            kept.append(c)
        else:
            logger.debug("reduce: dropped edge at (%d,%d)", _start(c), _end(c))

    return sorted(kept, key=_start)
