"""Shared/exclusive access guard around a single cache instance."""
from __future__ import annotations
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from kvcache_lib.storage.base import Cache


class ReadWriteLock:
    """Writer-preferring read/write lock.

    Any number of readers may hold the lock together. Once a writer is
    waiting, new readers block until it has finished.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class GuardedCache:
    """Owns one `Cache` and serializes access to it.

    Reads (`list`, `get`) share the lock; mutations take it exclusively.
    """

    def __init__(self, cache: Cache, lock: Optional[ReadWriteLock] = None) -> None:
        self.cache = cache
        self.lock = lock or ReadWriteLock()

    @property
    def backend_name(self) -> str:
        return type(self.cache).__name__

    def list(self) -> Dict[str, str]:
        with self.lock.read_locked():
            return self.cache.list()

    def get(self, key: str) -> Optional[str]:
        with self.lock.read_locked():
            return self.cache.get(key)

    def add(self, key: str, value: str) -> None:
        with self.lock.write_locked():
            self.cache.add(key, value)

    def delete(self, key: str) -> bool:
        with self.lock.write_locked():
            return self.cache.delete(key)

    def modify(self, key: str, value: str) -> bool:
        with self.lock.write_locked():
            return self.cache.modify(key, value)
