from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Protocol
import json
import yaml


class CorruptEntryError(ValueError):
    """Raised when a stored record cannot be decoded into a `CacheEntry`."""


@dataclass
class CacheEntry:
    key: str
    value: str


class Serializer(Protocol):
    """Serialize/deserialize cache entries for the disk backend.

    Implementations should be symmetric: `dump` -> bytes, `load` <- bytes.
    The record must carry the key because filenames are one-way hashes.
    """

    name: str

    def dump(self, entry: CacheEntry) -> bytes: ...

    def load(self, data: bytes) -> CacheEntry: ...


def _to_entry(data: Any) -> CacheEntry:
    if not isinstance(data, dict):
        raise CorruptEntryError("invalid cache entry: expected mapping")
    key = data.get("key")
    value = data.get("value")
    if not isinstance(key, str) or not isinstance(value, str):
        raise CorruptEntryError("invalid cache entry: 'key' and 'value' must be text")
    return CacheEntry(key=key, value=value)


class JSONSerializer:
    """Serializer using JSON (text). Default on-disk format."""

    name = "json"

    def dump(self, entry: CacheEntry) -> bytes:
        return json.dumps(asdict(entry)).encode("utf-8")

    def load(self, data: bytes) -> CacheEntry:
        try:
            raw = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CorruptEntryError("invalid cache entry: parse error") from e
        return _to_entry(raw)


class YAMLSerializer:
    """Serializer using YAML (text)."""

    name = "yaml"

    def dump(self, entry: CacheEntry) -> bytes:
        return yaml.safe_dump(asdict(entry), sort_keys=False, allow_unicode=True).encode("utf-8")

    def load(self, data: bytes) -> CacheEntry:
        try:
            raw = yaml.safe_load(data.decode("utf-8"))
        except (UnicodeDecodeError, yaml.YAMLError) as e:
            raise CorruptEntryError("invalid cache entry: parse error") from e
        return _to_entry(raw)


_SERIALIZERS: Dict[str, Callable[[], Serializer]] = {
    JSONSerializer.name: JSONSerializer,
    YAMLSerializer.name: YAMLSerializer,
}


def get_serializer(name: str) -> Serializer:
    try:
        return _SERIALIZERS[name]()
    except KeyError:
        raise ValueError(f"unknown serializer {name!r}; expected one of {sorted(_SERIALIZERS)}") from None
