"""Server configuration.

Settings come from an optional YAML file and are then overridden by
command-line flags. Only the keys of `Config` are accepted.
"""
from __future__ import annotations
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional, Tuple
import logging
import yaml

logger = logging.getLogger(__name__)


@dataclass
class Config:
    address: str = "127.0.0.1:8080"
    # None selects the in-memory backend
    cache_dir: Optional[str] = None
    log_level: str = "WARNING"
    key_hash: str = "blake2b"
    serializer: str = "json"
    discard_incomplete_writes: bool = True


def load_config(path: Optional[str | Path] = None) -> Config:
    """Load a `Config` from a YAML file. Missing path -> defaults."""
    if path is None:
        return Config()
    cfg_path = Path(path)
    with cfg_path.open('r', encoding='utf-8') as f:
        try:
            data: Any = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"invalid config format in {cfg_path}: parse error") from e
    if not isinstance(data, dict):
        raise ValueError(f"invalid config format in {cfg_path}: expected mapping")
    known = {f.name for f in fields(Config)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"unknown config keys in {cfg_path}: {', '.join(unknown)}")
    logger.debug("Loaded config from %s", cfg_path)
    return Config(**data)


def parse_address(address: str) -> Tuple[str, int]:
    """Split `host:port` into its parts."""
    host, sep, port = address.rpartition(':')
    if not sep or not host or not port.isdigit():
        raise ValueError(f"invalid address {address!r}; expected host:port")
    port_num = int(port)
    if not 0 < port_num < 65536:
        raise ValueError(f"invalid port in address {address!r}")
    return host.strip('[]'), port_num
