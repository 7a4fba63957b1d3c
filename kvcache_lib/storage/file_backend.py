"""Crash-safe, file-per-entry cache backend.

Each entry is stored as `<cache_dir>/<hexdigest(key)>` containing a
serialized `{key, value}` record. Writes go to `<digest>.new`, are fsynced,
atomically renamed over the final name and then the directory itself is
fsynced so the rename survives a crash. A reader therefore only ever sees
a complete old record or a complete new one.

Only "not found" is treated as an expected outcome. Every other `OSError`
and any undecodable record propagates to the caller.
"""
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from .base import Cache
from .hashing import Blake2bHasher
from .interfaces import KeyHasher
from .serializer import CacheEntry, CorruptEntryError, JSONSerializer, Serializer

logger = logging.getLogger(__name__)

TMP_SUFFIX = ".new"


class DiskCache(Cache):
    def __init__(
        self,
        cache_dir: str | Path,
        hasher: Optional[KeyHasher] = None,
        serializer: Optional[Serializer] = None,
    ) -> None:
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.hasher = hasher or Blake2bHasher()
        self.serializer = serializer or JSONSerializer()

    @property
    def name_length(self) -> int:
        return self.hasher.digest_size * 2

    def _path_for(self, key: str) -> Path:
        return self.cache_dir / self.hasher.hexdigest(key)

    def _sync_dir(self) -> None:
        # Makes renames and unlinks in the directory durable.
        fd = os.open(self.cache_dir, os.O_RDONLY)
        try:
            os.fsync(fd)
        finally:
            os.close(fd)

    def _read_entry(self, path: Path) -> CacheEntry:
        with open(path, "rb") as f:
            return self.serializer.load(f.read())

    def _write(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp = path.with_name(path.name + TMP_SUFFIX)
        data = self.serializer.dump(CacheEntry(key=key, value=value))
        with open(tmp, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
        self._sync_dir()
        logger.debug("Committed %s (%d bytes)", path.name, len(data))

    def list(self) -> Dict[str, str]:
        entries: Dict[str, str] = {}
        with os.scandir(self.cache_dir) as it:
            names = [e.name for e in it if len(e.name) == self.name_length]
        for name in names:
            try:
                entry = self._read_entry(self.cache_dir / name)
            except FileNotFoundError:
                logger.debug("Entry %s vanished during listing", name)
                continue
            entries[entry.key] = entry.value
        return entries

    def add(self, key: str, value: str) -> None:
        self._write(key, value)

    def delete(self, key: str) -> bool:
        path = self._path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        self._sync_dir()
        logger.debug("Deleted %s", path.name)
        return True

    def modify(self, key: str, value: str) -> bool:
        # The existence check and the write are not atomic together; a
        # concurrent delete in between re-creates the entry.
        try:
            os.stat(self._path_for(key))
        except FileNotFoundError:
            return False
        self._write(key, value)
        return True

    def get(self, key: str) -> Optional[str]:
        try:
            entry = self._read_entry(self._path_for(key))
        except FileNotFoundError:
            return None
        if entry.key != key:
            raise CorruptEntryError(f"entry file {self.hasher.hexdigest(key)} holds key {entry.key!r}")
        return entry.value

    def discard_incomplete_writes(self) -> int:
        """Remove `<digest>.new` files left behind by an interrupted write.

        Only safe while no other writer uses the directory. Returns the
        number of files removed.
        """
        removed = 0
        tmp_length = self.name_length + len(TMP_SUFFIX)
        with os.scandir(self.cache_dir) as it:
            stale = [e.path for e in it if len(e.name) == tmp_length and e.name.endswith(TMP_SUFFIX)]
        for p in stale:
            try:
                os.unlink(p)
            except FileNotFoundError:
                continue
            removed += 1
        if removed:
            self._sync_dir()
            logger.info("Discarded %d incomplete write(s) in %s", removed, self.cache_dir)
        return removed
