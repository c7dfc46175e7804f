# conditions.py
"""
Builders for trim rules and their conditions.

Rules arrive from an external rule source as plain dicts; these helpers produce the
same shapes so callers (and tests) don't hand-write them:

    rule = trim_rule("destination", [
        between_condition("from", "to"),
        position_condition(TrimType.AFTER_LAST, ["to"], skip=["nowhere"]),
    ])

Between patterns may be given as compiled `regex` patterns, as "/body/flags" strings
(the serialized form used by rule files), or as bare pattern strings.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence, Union
import regex as re

from trim_types import POSITION_TYPES, TrimType

_SLASHED_RX = re.compile(r"^/(?P<body>.*)/(?P<flags>[a-z]*)$", re.DOTALL)

_FLAG_MAP = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": re.UNICODE,
    "x": re.VERBOSE,
    # global / sticky only affect how the source runtime iterated; scanning is always exhaustive here
    "g": 0,
    "y": 0,
}


def compile_pattern(pattern: Any, case_sensitive: Optional[bool] = None):
    """
    Normalize a between pattern into a compiled `regex` pattern.

    A compiled pattern passes through untouched. Any string that starts with "/" and
    ends with "/" plus optional flag letters is read as the serialized "/body/flags"
    form, so "/usr/" compiles to "usr". To match literal enclosing slashes, wrap the
    pattern once more ("//usr//") or pass a compiled pattern. Anything else is compiled as-is. With
    case_sensitive=False, IGNORECASE is added to string patterns.
    Raises regex.error for invalid patterns.
    """
    if hasattr(pattern, "finditer"):
        return pattern
    text = str(pattern)
    flags = 0
    m = _SLASHED_RX.match(text)
    if m:
        text = m.group("body")
        for ch in m.group("flags"):
            if ch not in _FLAG_MAP:
                raise re.error(f"unknown pattern flag {ch!r}")
            flags |= _FLAG_MAP[ch]
    if case_sensitive is False:
        flags |= re.IGNORECASE
    return re.compile(text, flags)


def _as_list(words: Union[str, Sequence[str]]) -> List[str]:
    return [words] if isinstance(words, str) else list(words)


def _options(case_sensitive: bool, no_spaces: bool, skip: Optional[Sequence[str]]) -> Dict[str, Any]:
    opts: Dict[str, Any] = {"caseSensitive": case_sensitive, "noSpaces": no_spaces}
    if skip:
        opts["skip"] = list(skip)
    return opts


def between_condition(
    left: Union[str, Sequence[str]],
    right: Union[str, Sequence[str]],
    case_sensitive: bool = False,
    no_spaces: bool = False,
    skip: Optional[Sequence[str]] = None,
) -> Dict[str, Any]:
    left_words, right_words = _as_list(left), _as_list(right)
    alts = []
    for lw in left_words:
        for rw in right_words:
            l = re.escape(lw) if no_spaces else f" {re.escape(lw)} "
            r = re.escape(rw) if no_spaces else f" {re.escape(rw)} "
            alts.append(f"(?<={l})(.*)(?={r})")
    body = "|".join(alts)
    return {
        "type": TrimType.BETWEEN.value,
        "leftWords": left_words,
        "rightWords": right_words,
        "regex": f"/{body}/g" + ("" if case_sensitive else "i"),
        "options": _options(case_sensitive, no_spaces, skip),
    }


def position_condition(
    trim_type: Union[str, TrimType],
    words: Union[str, Sequence[str]],
    case_sensitive: bool = False,
    no_spaces: bool = False,
    skip: Optional[Sequence[str]] = None,
) -> Dict[str, Any]:
    parsed = TrimType.parse(trim_type)
    if parsed not in POSITION_TYPES:
        raise ValueError(f"not a position strategy: {trim_type!r}")
    return {
        "type": parsed.value,
        "words": _as_list(words),
        "options": _options(case_sensitive, no_spaces, skip),
    }


def trim_rule(name: str, conditions: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    return {"name": name, "type": "trim", "rules": list(conditions)}
