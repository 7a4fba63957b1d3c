"""Key-to-filename hashers for the disk cache.

The digest is used verbatim as the entry's filename, so it must be
collision-resistant and of fixed length.
"""
import hashlib
from typing import Callable, Dict

from .interfaces import KeyHasher


class Blake2bHasher:
    """BLAKE2b with a 32-byte digest (64 hex characters)."""

    name = "blake2b"
    digest_size = 32

    def hexdigest(self, key: str) -> str:
        return hashlib.blake2b(key.encode("utf-8"), digest_size=self.digest_size).hexdigest()


class Sha256Hasher:
    name = "sha256"
    digest_size = 32

    def hexdigest(self, key: str) -> str:
        return hashlib.sha256(key.encode("utf-8")).hexdigest()


_HASHERS: Dict[str, Callable[[], KeyHasher]] = {
    Blake2bHasher.name: Blake2bHasher,
    Sha256Hasher.name: Sha256Hasher,
}


def get_hasher(name: str) -> KeyHasher:
    try:
        return _HASHERS[name]()
    except KeyError:
        raise ValueError(f"unknown key hash {name!r}; expected one of {sorted(_HASHERS)}") from None
