# tests/conftest.py
import sys
from pathlib import Path

# Ensure the project root (where trim_extractor.py lives) is importable for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
