"""Command-line entry point: run the cache server with uvicorn.

    python3 kvcache.py --address 127.0.0.1:8080 --cache-dir ./data
"""
from __future__ import annotations
import argparse
import logging
import os
import sys
from dataclasses import replace
from typing import Iterable, Optional

import uvicorn

from kvcache_lib.config import load_config, parse_address
from kvcache_lib.main import create_app

logger = logging.getLogger("kvcache")


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Key-value cache server")
    p.add_argument("--address", help="host:port to listen on (default 127.0.0.1:8080)")
    p.add_argument("--cache-dir", help="directory for the durable cache; in-memory if omitted")
    p.add_argument("--config", default=os.environ.get("KVCACHE_CONFIG"), help="YAML config file")
    p.add_argument("--log-level", help="logging level name, e.g. INFO")
    return p


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = get_parser().parse_args(list(argv) if argv is not None else None)
    try:
        config = load_config(args.config)
        overrides = {
            'address': args.address,
            'cache_dir': args.cache_dir,
            'log_level': args.log_level,
        }
        config = replace(config, **{k: v for k, v in overrides.items() if v is not None})
        host, port = parse_address(config.address)
        app = create_app(config)
    except (OSError, ValueError) as e:
        print(f"Startup failed: {e}", file=sys.stderr)
        return 1

    logger.log(100, "Starting to listen on http://%s", config.address)
    uvicorn.run(app, host=host, port=port, log_level=config.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
