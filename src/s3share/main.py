from contextlib import asynccontextmanager
from datetime import datetime
import logging
from typing import Callable, Optional

from fastapi import FastAPI
import uvicorn
import asyncio

from s3share.cache import SecretCache, get_cache
from s3share.configs.config import Config, LogLevel, get_config
from s3share.error_handling.errors import CacheError
from s3share.error_handling.handlers import register_exception_handlers
from s3share.routes import health, objects, shares
from s3share.services.share_service import ShareService
from s3share.storage import ObjectStore, get_store

logger = logging.getLogger("s3share")


def configure_logging(level: LogLevel) -> None:
    numeric = logging.DEBUG if level == LogLevel.TRACE else getattr(logging, level.value.upper())
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    cache = app.state.share_service.cache
    ping = getattr(cache, "ping", None)
    if ping is not None:
        try:
            await asyncio.to_thread(ping)
            logger.info("Secret cache connection verified")
        except CacheError as e:
            logger.error(f"Secret cache is unreachable: {e}")
    logger.info(f"Share links will be served under {app.state.share_service.base_url}")

    yield

    close = getattr(cache, "close", None)
    if close is not None:
        close()
    logger.info("Share service stopped")


def create_app(
    config: Optional[Config] = None,
    store: Optional[ObjectStore] = None,
    cache: Optional[SecretCache] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    """
    Build the application with its adapters wired in.

    Adapters not passed explicitly are built from *config*.
    """
    config = config or get_config()
    service = ShareService(
        store=store if store is not None else get_store(config),
        cache=cache if cache is not None else get_cache(config),
        base_url=config.base_url,
        max_age_days=config.max_age_days,
        clock=clock,
    )

    app = FastAPI(
        title="S3 Share API",
        description="Time-limited share links for objects in S3",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.share_service = service
    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(shares.router)
    # Catch-all, must stay last.
    app.include_router(objects.router)
    return app


async def main():
    """
    Main entry point for the share server.
    """
    config = get_config()
    configure_logging(config.s3share_log_level)
    logger.info("Starting S3 Share API...")

    server_config = uvicorn.Config(
        create_app(config),
        host=config.fastapi_host,
        port=config.fastapi_port,
        timeout_keep_alive=config.idle_timeout,
        timeout_graceful_shutdown=config.shutdown_timeout,
        log_level=config.s3share_log_level.value,
        use_colors=True,
        # Share URLs carry secrets.
        access_log=False,
    )
    server = uvicorn.Server(server_config)

    try:
        await server.serve()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    except Exception as e:
        logger.error(f"Server error: {str(e)}")
        raise


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
