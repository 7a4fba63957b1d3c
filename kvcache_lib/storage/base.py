"""Cache backend interface definitions.

Defines the `Cache` abstract class that every storage backend implements.
Backends must be observably identical: callers never depend on which one
they were given.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, Optional


class Cache(ABC):
    """Abstract key-value cache.

    Implementations are not required to be thread-safe; callers serialize
    mutating access (see `kvcache_lib.locking.GuardedCache`).
    """

    @abstractmethod
    def list(self) -> Dict[str, str]:
        """Return a snapshot of all live entries. Empty dict when empty."""

    @abstractmethod
    def add(self, key: str, value: str) -> None:
        """Insert `key` or replace its value if present."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove `key`. Return True if an entry existed, False otherwise."""

    @abstractmethod
    def modify(self, key: str, value: str) -> bool:
        """Replace the value of an existing entry.

        Never creates an entry. Returns False if `key` is absent.
        """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under `key`, or None if absent."""
