"""Application factory for the key-value cache FastAPI app.

This module exposes `create_app(config: Config) -> FastAPI` which performs
all setup (logging, cache construction, service composition and router
registration). Nothing happens at import time so tests can construct
isolated apps:

    from kvcache_lib.main import create_app
    from kvcache_lib.config import Config
    app = create_app(Config(cache_dir="data"))
"""
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from kvcache_lib.config import Config
from kvcache_lib.locking import GuardedCache
from kvcache_lib.logging_config import configure_logging
from kvcache_lib.services import ServiceContainer
from kvcache_lib.storage import DiskCache, create_cache


def create_app(config: Config) -> FastAPI:
    """Create and return a configured FastAPI application."""
    logger = configure_logging(config.log_level)

    cache = create_cache(
        cache_dir=config.cache_dir,
        key_hash=config.key_hash,
        serializer=config.serializer,
    )
    if isinstance(cache, DiskCache):
        logger.info("Using disk cache in %s", cache.cache_dir)
        if config.discard_incomplete_writes:
            cache.discard_incomplete_writes()
    else:
        logger.info("Using in-memory cache")

    container = ServiceContainer()
    container.register_singleton("config", config)
    container.register_singleton("cache", GuardedCache(cache))

    app = FastAPI(title="KV Cache Server")
    app.state.container = container

    # Rejected input is left out of the 422 body; it may not be encodable.
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
        return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})

    # Router registration: import here to avoid import-time side-effects
    from kvcache_lib.server.api import router as cache_router
    app.include_router(cache_router)

    return app
