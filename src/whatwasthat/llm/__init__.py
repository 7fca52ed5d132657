"""Language model integration for whatwasthat."""

from whatwasthat.llm.client import (
    ModelError,
    ModelOutputError,
    ModelQueryClient,
    ModelServiceError,
    ModelUnavailableError,
    is_model_unavailable,
)

__all__ = [
    "ModelError",
    "ModelOutputError",
    "ModelQueryClient",
    "ModelServiceError",
    "ModelUnavailableError",
    "is_model_unavailable",
]
