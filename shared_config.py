# shared_config.py
from __future__ import annotations
from dataclasses import asdict
from typing import Any, Dict
import argparse

from trim_extractor import DEFAULT_CONFIG, TrimConfig

# ---- Public API -----------------------------------------------------------------

def add_extractor_flags(parser: argparse.ArgumentParser) -> None:
    """
    Attach a consistent set of trim-extractor flags to any argparse parser.
    Every flag defaults to None so unset values fall back to TrimConfig defaults.
    """
    parser.add_argument("--entity-name", type=str, default=None,
                        help="Entity name stamped on edges and used as the registry key prefix.")
    parser.add_argument("--rule-type", type=str, default=None,
                        help="Rule type consumed from nerRules (default: trim).")
    parser.add_argument("--default-locale", type=str, default=None,
                        help="Locale used when the input record carries none.")

    # Overlap handling
    parser.add_argument("--keep-overlaps", dest="keep_overlaps", action="store_true", default=None,
                        help="Only collapse exact duplicate edges.")
    parser.add_argument("--no-keep-overlaps", dest="keep_overlaps", action="store_false",
                        help="Resolve overlapping edges (default).")

    # Scores
    parser.add_argument("--positional-accuracy", type=float, default=None,
                        help="Accuracy for before/after edges.")
    parser.add_argument("--between-accuracy", type=float, default=None,
                        help="Accuracy for between edges.")

def config_from_args(args: argparse.Namespace) -> TrimConfig:
    """Convert parsed args → TrimConfig, falling back to DEFAULT_CONFIG for unset flags."""
    def _pick(name: str) -> Any:
        val = getattr(args, name, None)
        return getattr(DEFAULT_CONFIG, name) if val is None else val

    return TrimConfig(
        entity_name=_pick("entity_name"),
        rule_type=_pick("rule_type"),
        default_locale=_pick("default_locale"),
        keep_overlaps=bool(_pick("keep_overlaps")),
        positional_accuracy=float(_pick("positional_accuracy")),
        between_accuracy=float(_pick("between_accuracy")),
    )

def config_to_dict(cfg: TrimConfig) -> Dict[str, Any]:
    """Emit only the fields that differ from DEFAULT_CONFIG."""
    defaults = asdict(DEFAULT_CONFIG)
    return {k: v for k, v in asdict(cfg).items() if defaults.get(k) != v}
