# registry.py
"""Locale-keyed lookup of extractor instances (filled once at startup, read during extraction)."""

from __future__ import annotations
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class LocaleRegistry:
    def __init__(self, entries: Optional[Dict[str, Any]] = None):
        self._entries: Dict[str, Any] = dict(entries or {})

    def register(self, key: str, extractor: Any) -> None:
        logger.debug("registry: register %s -> %s", key, type(extractor).__name__)
        self._entries[key] = extractor

    def get(self, key: str) -> Optional[Any]:
        return self._entries.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
