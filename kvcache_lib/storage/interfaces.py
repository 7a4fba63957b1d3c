from typing import Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class CacheProtocol(Protocol):
    """Cache protocol mirroring `kvcache_lib.storage.base.Cache`.

    Implementations should follow the semantics documented on the abstract
    base class (booleans/None for absent keys, errors only for storage
    malfunction).
    """

    def list(self) -> Dict[str, str]: ...

    def add(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> bool: ...

    def modify(self, key: str, value: str) -> bool: ...

    def get(self, key: str) -> Optional[str]: ...


@runtime_checkable
class KeyHasher(Protocol):
    """Maps a key to a fixed-length, filesystem-safe hex name."""

    name: str
    digest_size: int

    def hexdigest(self, key: str) -> str: ...
