"""
Main entry point for URL shortener service.

Concurrency: requests are served concurrently on the asyncio event loop
(FastAPI + asyncpg connection pool + redis.asyncio). WORKERS > 1 runs
that many uvicorn worker processes, each building its own app and DB pool.

Usage:
    shortener

Environment variables:
    DATABASE_URL - PostgreSQL connection URL ('memory://' for in-process store)
    CREATE_TABLES - Set to 'true' to create the url table on startup
    REDIS_URL - Redis connection URL (optional)
    HOST / PORT - Address to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import logging
import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .config import Config, load_config
from .lib.common.logging_config import get_logger, setup_logging
from .lib.database import RedisCache, create_store
from .lib.registry import UrlRegistry
from .lib.shortcode import ShortCodeGenerator
from .web_app import create_app


async def build_registry(config: Config, logger: logging.Logger) -> UrlRegistry:
    """Create the store, cache and registry described by the configuration."""
    store = create_store(
        config.database_url,
        pool_max_size=config.pool_max_size,
        connection_timeout_seconds=config.store_timeout_seconds,
        logger=logger,
    )

    if config.create_tables:
        await store.create_tables()

    cache = None
    if config.redis_url:
        cache = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
        await cache.connect()
    else:
        logger.info("Redis caching disabled")

    return UrlRegistry(
        store=store,
        cache=cache,
        short_code_generator=ShortCodeGenerator(),
        logger=logger,
        max_collision_retries=config.max_collision_retries,
        store_timeout_seconds=config.store_timeout_seconds,
        validate_urls=config.validate_urls,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = get_logger()

    logger.info("Starting URL shortener service...")
    registry = await build_registry(config, logger)
    app.state.registry = registry
    logger.info("Service started successfully")

    yield

    logger.info("Shutting down URL shortener service...")
    await registry.close()
    app.state.registry = None
    logger.info("Service stopped")


def _configure_logging(config: Config) -> logging.Logger:
    return setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )


def build_app() -> FastAPI:
    """Application factory loaded by each uvicorn worker process."""
    config = load_config()
    _configure_logging(config)
    return create_app(config=config, lifespan=lifespan)


def main():
    """Main entry point."""
    config = load_config()
    logger = _configure_logging(config)

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.safe_dump()}")

    if config.workers > 1:
        # Worker processes need an import string; uvicorn handles their signals
        logger.info(f"Starting {config.workers} workers on {config.host}:{config.port}")
        uvicorn.run(
            "shortener.app:build_app",
            factory=True,
            host=config.host,
            port=config.port,
            workers=config.workers,
            log_level=config.log_level.lower(),
            access_log=True,
        )
        return

    app = create_app(config=config, lifespan=lifespan)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
