#!/usr/bin/env python3
"""
Run the trim extractor over a JSON input record and print the resulting edges.

Input JSON schema (single record):
{
  "text": "string (or \"utterance\")",
  "locale": "en",                         # optional
  "nerRules": [ {"type": "trim", "rules": [ ... ]} ],
  "edges": [ ... ]                        # optional, edges from earlier extractors
}

Usage:
  python demo/run_trim_report.py --input demo/example.json
  python demo/run_trim_report.py --input demo/example.json --output demo/edges.json --pretty

Optional:
  --locale L          Override the record's locale
  --keep-overlaps     Only collapse exact duplicate edges
  (see shared_config.add_extractor_flags for the remaining flags)
"""

import argparse
import json
import logging
import sys
import os
from pathlib import Path

# Ensure the repo root (which contains trim_extractor.py) is importable when running from demo/
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from shared_config import add_extractor_flags, config_from_args, config_to_dict
from trim_extractor import TrimExtractor
from trim_types import Edge

def _read_json(path: Path) -> dict:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        print(f"❌ Failed to read JSON from {path}: {e}", file=sys.stderr)
        sys.exit(1)

def _validate_payload(payload: dict) -> None:
    if not isinstance(payload, dict):
        print("❌ Input JSON must be an object.", file=sys.stderr)
        sys.exit(1)
    if not isinstance(payload.get("text", payload.get("utterance")), str):
        print("❌ Input must include a string field 'text' or 'utterance'.", file=sys.stderr)
        sys.exit(1)
    if "nerRules" in payload and not isinstance(payload["nerRules"], list):
        print("❌ 'nerRules' must be a list of rules.", file=sys.stderr)
        sys.exit(1)

def main(argv=None):
    ap = argparse.ArgumentParser(description="Trim extractor report")
    ap.add_argument("--input", "-i", required=True, help="Path to input JSON record")
    ap.add_argument("--output", "-o", default=None, help="Optional path to write the edges JSON")
    ap.add_argument("--pretty", action="store_true", help="Pretty print JSON output")
    ap.add_argument("--locale", default=None, help="Override the record's locale")
    ap.add_argument("--verbose", "-v", action="store_true", help="Log extraction details to stderr")
    add_extractor_flags(ap)
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    payload = _read_json(Path(args.input))
    _validate_payload(payload)
    if args.locale:
        payload["locale"] = args.locale

    cfg = config_from_args(args)
    record = TrimExtractor(config=cfg).run(payload)

    report = {"edges": [e.to_dict() if isinstance(e, Edge) else dict(e) for e in record["edges"]]}
    overrides = config_to_dict(cfg)
    if overrides:
        report["config"] = overrides

    out_text = json.dumps(report, indent=2 if args.pretty or args.output else None, ensure_ascii=False)

    if args.output:
        outp = Path(args.output)
        outp.parent.mkdir(parents=True, exist_ok=True)
        outp.write_text(out_text + "\n", encoding="utf-8")
        print(f"✅ Wrote edges → {outp}")
    else:
        print(out_text)

if __name__ == "__main__":
    main()
