"""Storage abstraction package for the key-value cache."""
from __future__ import annotations
from pathlib import Path
from typing import Optional

from .base import Cache
from .file_backend import DiskCache
from .hashing import get_hasher
from .interfaces import CacheProtocol, KeyHasher
from .memory_backend import MemoryCache
from .serializer import CacheEntry, CorruptEntryError, get_serializer


def create_cache(
    cache_dir: Optional[str | Path] = None,
    key_hash: str = "blake2b",
    serializer: str = "json",
) -> Cache:
    """Return a `DiskCache` rooted at `cache_dir`, or a `MemoryCache` if None."""
    if cache_dir is None:
        return MemoryCache()
    return DiskCache(cache_dir, hasher=get_hasher(key_hash), serializer=get_serializer(serializer))


__all__ = [
    "Cache",
    "CacheEntry",
    "CacheProtocol",
    "CorruptEntryError",
    "DiskCache",
    "KeyHasher",
    "MemoryCache",
    "create_cache",
]
