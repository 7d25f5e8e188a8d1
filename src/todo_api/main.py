from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .exceptions import ConfigError, DecodeError, StorageError
from .routers import todos as todos_router
from .settings import Settings, get_settings
from .store import TodoStore

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

openapi_tags = [
    {"name": "todos", "description": "Create, list, update and delete Todo items."},
]


# PUBLIC_INTERFACE
def configure_logging(level: str = "INFO") -> None:
    """Install the process-wide log handler and level."""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


async def decode_error_handler(request: Request, exc: DecodeError) -> JSONResponse:
    """
    Return a consistent JSON structure for requests that cannot be decoded.

    Response format:
        {
            "error": "DecodeError",
            "message": "Request decoding failed",
            "detail": [... pydantic/fastapi error details ...]
        }
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": type(exc).__name__,
            "message": exc.message,
            "detail": jsonable_encoder(exc.detail),
        },
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report path parameters FastAPI could not convert as decode errors."""
    return await decode_error_handler(request, DecodeError(list(exc.errors())))


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    """Log the storage failure and answer with a generic server error."""
    # Driver messages stay in the log, never in the response body
    logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": type(exc).__name__, "message": "Internal server error"},
    )


# PUBLIC_INTERFACE
def create_app(settings: Settings, store: Optional[TodoStore] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Loaded application settings.
        store: Storage gateway to serve from. Built from settings.database_url
            when omitted.

    Returns:
        The configured application. The store is reachable through app.state.store
        and its connection pool is disposed when the application shuts down.
    """
    if store is None:
        store = TodoStore.from_url(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        store.dispose()

    app = FastAPI(
        title="Todo API",
        description="Backend API service for managing todos stored in a relational database.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    # Unrestricted cross-origin access on every route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DecodeError, decode_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)

    logger.info("Mapping Routes")
    app.include_router(todos_router.router)
    return app


# PUBLIC_INTERFACE
def main() -> None:
    """
    Load settings, check the database and serve the API until signalled.

    Exits with status 1 when configuration is invalid or the database cannot
    be reached.
    """
    try:
        settings = get_settings()
    except ConfigError as e:
        configure_logging()
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    configure_logging(settings.log_level)

    try:
        store = TodoStore.from_url(settings.database_url)
        store.init_schema()
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)
    except StorageError as e:
        logger.error("Database is not reachable: %s", e.__cause__ or e)
        sys.exit(1)

    app = create_app(settings, store)

    logger.info("Creating Server at http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
