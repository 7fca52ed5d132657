"""FastAPI application for the whatwasthat service."""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from whatwasthat import __version__
from whatwasthat.api import routes
from whatwasthat.api.middleware import RequestLoggingMiddleware
from whatwasthat.config import Config
from whatwasthat.service import LookupService
from whatwasthat.utils.logger import get_logger

logger = get_logger(__name__)

INVALID_QUESTION_MESSAGE = "Body must include a 'question' string"


class AppState:
    """Application state container."""

    def __init__(self, config: Config, service: LookupService):
        self.config = config
        self.service = service
        self.start_time = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting whatwasthat API", version=__version__)

    yield

    logger.info("Shutting down whatwasthat API")
    await app.state.whatwasthat.service.aclose()
    logger.info("Shutdown complete")


def create_app(config: Config, service: Optional[LookupService] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        config: Application configuration
        service: Lookup service to serve (built from config when omitted)

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="whatwasthat",
        description="Find the movie or episode a scene comes from",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if service is None:
        service = LookupService.from_config(config)
    app.state.whatwasthat = AppState(config, service)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Reject bodies without a usable question."""
        logger.warning(
            "Request validation failed",
            path=request.url.path,
            method=request.method,
            errors=exc.errors(),
        )

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"status": "error", "error_message": INVALID_QUESTION_MESSAGE},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch all unhandled exceptions."""
        logger.error(
            "Unhandled exception in request handler",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            error_type=type(exc).__name__,
            exc_info=True,
        )

        message = "Internal server error"
        if config.api.expose_errors and str(exc):
            message = str(exc)

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "error", "error_message": message},
        )

    app.include_router(routes.router)

    logger.info(
        "FastAPI application created",
        version=__version__,
        api_port=config.api.port,
    )

    return app
