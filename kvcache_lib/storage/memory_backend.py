"""Simple memory-backed cache.

Entries live in a plain dict and vanish with the process.
"""
from typing import Dict, Optional

from .base import Cache


class MemoryCache(Cache):
    def __init__(self) -> None:
        self._store: Dict[str, str] = {}

    def list(self) -> Dict[str, str]:
        return dict(self._store)

    def add(self, key: str, value: str) -> None:
        self._store[key] = value

    def delete(self, key: str) -> bool:
        return self._store.pop(key, None) is not None

    def modify(self, key: str, value: str) -> bool:
        if key not in self._store:
            return False
        self._store[key] = value
        return True

    def get(self, key: str) -> Optional[str]:
        return self._store.get(key)
