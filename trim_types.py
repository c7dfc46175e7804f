# trim_types.py
"""Shared value types for the trim extractor: strategy names and the Edge record."""

from __future__ import annotations
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Mapping, Tuple

# Half-open (start, end) range of one anchor occurrence
AnchorPosition = Tuple[int, int]


class TrimType(str, Enum):
    """Span strategies, valued with the names used by the rule source."""
    BETWEEN = "between"
    BEFORE = "before"
    BEFORE_FIRST = "beforeFirst"
    BEFORE_LAST = "beforeLast"
    AFTER = "after"
    AFTER_FIRST = "afterFirst"
    AFTER_LAST = "afterLast"

    @classmethod
    def parse(cls, value: Any):
        """Return the matching TrimType, or None for unknown strategies."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            return None


POSITION_TYPES = tuple(t for t in TrimType if t is not TrimType.BETWEEN)

# camelCase keys used on the pipeline's edge dicts
_WIRE_KEYS = {"source_text": "sourceText", "utterance_text": "utteranceText"}


@dataclass(frozen=True)
class Edge:
    type: str
    start: int          # inclusive
    end: int            # inclusive; end < start for an empty span
    len: int
    accuracy: float
    source_text: str
    utterance_text: str
    entity: str

    @property
    def is_empty(self) -> bool:
        return self.len <= 0

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        if isinstance(self.type, TrimType):
            d["type"] = self.type.value
        return {_WIRE_KEYS.get(k, k): v for k, v in d.items()}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Edge":
        """Build an Edge from a pipeline dict (camelCase or snake_case keys)."""
        source = d.get("sourceText", d.get("source_text", ""))
        utterance = d.get("utteranceText", d.get("utterance_text", source))
        start = int(d.get("start", 0))
        end = int(d.get("end", start - 1))
        return cls(
            type=d.get("type", ""),
            start=start,
            end=end,
            len=int(d.get("len", end - start + 1)),
            accuracy=float(d.get("accuracy", 0.0)),
            source_text=source,
            utterance_text=utterance,
            entity=d.get("entity", ""),
        )


def edge_field(edge: Any, name: str, default: Any = None) -> Any:
    """Read a field from an Edge or from an edge dict left by another extractor."""
    if isinstance(edge, Mapping):
        if name == "len" and "len" not in edge and "start" in edge and "end" in edge:
            return edge["end"] - edge["start"] + 1
        return edge.get(name, default)
    return getattr(edge, name, default)
