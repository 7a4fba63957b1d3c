from __future__ import annotations
import logging


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Configure root logging for the application.

    Reconfigures the root logger to `level` (a logging level name) and
    returns a module logger for the caller. Unknown names raise
    `ValueError`.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"unknown log level {level!r}")

    # Reconfigure root handlers to use the selected level and format
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=numeric, format='%(asctime)s %(levelname)s [%(name)s]: %(message)s')
    logging.log(100, f'[kvcache]: Log level set to: {logging.getLevelName(numeric)}')

    # Keep known noisy libraries quiet by default
    logging.getLogger('uvicorn.access').setLevel(max(numeric, logging.WARNING))
    return logging.getLogger(__name__)
