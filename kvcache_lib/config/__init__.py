from .config import Config, load_config, parse_address

__all__ = ["Config", "load_config", "parse_address"]
