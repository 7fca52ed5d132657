"""Pydantic models for API requests and responses."""

from typing import Dict

from pydantic import BaseModel, Field, StrictStr


class AskRequest(BaseModel):
    """Body of POST /ask."""

    question: StrictStr = Field(..., min_length=1, description="Free-text question")


class ErrorResponse(BaseModel):
    """Error envelope."""

    status: str = "error"
    error_message: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str


class DebugResponse(BaseModel):
    """Configuration presence and process info, without secret values."""

    status: str = "ok"
    message: str = "Debug route responding"
    version: str
    now: str
    uptime_seconds: float
    config_presence: Dict[str, bool]
