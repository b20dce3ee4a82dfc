"""FastAPI application factory."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..lib.common.logging_config import get_logger
from ..lib.errors import InvalidInput, ShortenerError
from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware

logger = get_logger("web")


async def shortener_error_handler(request: Request, exc: ShortenerError):
    """Convert core errors into generic JSON responses."""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} at {request.url.path}: {exc}")
    else:
        logger.warning(f"{type(exc).__name__} at {request.url.path}: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 instead of 422."""
    logger.warning(f"Validation error at {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=InvalidInput.status_code,
        content={"error": InvalidInput.public_message},
    )


async def internal_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error at {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": ShortenerError.public_message})


def create_app(config, registry=None, lifespan=None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        config: Configuration instance
        registry: Registry instance (may be left None when lifespan sets it)
        lifespan: Optional lifespan context manager

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="Maps long URLs to short codes and redirects back",
        version="1.0.0",
        docs_url="/docs",
        redoc_url=None,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.registry = registry

    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(ShortenerError, shortener_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    # Order matters: /{path} in the web router catches everything else
    app.include_router(api_router, prefix="/url", tags=["URLs"])
    app.include_router(web_router, tags=["Redirect"])

    return app
