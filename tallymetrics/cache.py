"""Thread-safe caches for interned strings and converted tag lists."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from tallymetrics.identity import string_string_map


@dataclass(frozen=True)
class MetricTag:
    """A single name/value tag attached to a metric."""

    name: str
    value: str


class StringInterner:
    """Returns one shared instance for each distinct string."""

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}
        self._lock = threading.Lock()

    def intern(self, text: str) -> str:
        """Return the canonical instance of text, storing it if new."""
        existing = self._entries.get(text)
        if existing is not None:
            return existing
        with self._lock:
            return self._entries.setdefault(text, text)


class TagCache:
    """Maps tag-map identity keys to converted tag lists."""

    def __init__(self) -> None:
        self._entries: Dict[int, List[MetricTag]] = {}
        self._lock = threading.Lock()

    def get(self, key: int) -> Optional[List[MetricTag]]:
        """Return the cached tags for key, or None if absent."""
        with self._lock:
            return self._entries.get(key)

    def set(self, key: int, tags: List[MetricTag]) -> List[MetricTag]:
        """Store tags under key unless present; return the stored value."""
        with self._lock:
            return self._entries.setdefault(key, tags)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def tag_map_key(tags: Mapping[str, str]) -> int:
    """Key for a tag map, independent of its iteration order."""
    return string_string_map(tags)