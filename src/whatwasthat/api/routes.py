"""API routes for question lookup and diagnostics."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from whatwasthat import __version__
from whatwasthat.api.models import AskRequest, DebugResponse, ErrorResponse, HealthResponse
from whatwasthat.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health():
    """Liveness check."""
    return HealthResponse(version=__version__)


@router.get("/debug", response_model=DebugResponse)
async def debug(request: Request):
    """Report which settings are configured, never their values."""
    app_state = request.app.state.whatwasthat
    config = app_state.config

    return DebugResponse(
        version=__version__,
        now=datetime.now(timezone.utc).isoformat(),
        uptime_seconds=round(time.time() - app_state.start_time, 3),
        config_presence={
            "tmdb_api_key": bool(config.tmdb.api_key),
            "model_api_key": bool(config.model.api_key),
            "model_base_url": config.model.base_url_overridden,
            "model_preferred": config.model.preferred_overridden,
        },
    )


@router.post(
    "/ask",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)
async def ask(request: Request, payload: AskRequest):
    """Identify the movie or episode a question is about.

    Args:
        request: FastAPI request
        payload: Question body

    Returns:
        Enriched identification, or the error result with status 404
    """
    service = request.app.state.whatwasthat.service

    result = await service.lookup_and_enrich(payload.question)
    body = result.model_dump(mode="json")

    if not result.is_success:
        logger.info("Lookup returned error", error_message=result.error_message)
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=body)

    logger.info(
        "Lookup complete",
        type=result.type,
        enriched=body.get("tmdb_data") is not None,
    )
    return body
