"""Language model client for identifying media from a question."""

import json
from typing import List, Optional

import httpx
import structlog
from pydantic import ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt

from whatwasthat.llm.schema import RESPONSE_SCHEMA, build_system_prompt
from whatwasthat.models.media import MediaQuery

logger = structlog.get_logger(__name__)


class ModelError(Exception):
    """Base exception for language model errors."""

    pass


class ModelUnavailableError(ModelError):
    """The requested model does not exist or is not served; try the next one."""

    def __init__(self, model: str, message: str):
        super().__init__(message)
        self.model = model


class ModelServiceError(ModelError):
    """Non-retryable upstream failure."""

    pass


class ModelOutputError(ModelError):
    """The model answered with empty or non-JSON output."""

    pass


def is_model_unavailable(status_code: int, error_body: Optional[dict]) -> bool:
    """Classify an HTTP error response as "model unavailable".

    Args:
        status_code: HTTP status of the failed response
        error_body: Decoded JSON body, if any

    Returns:
        True for 404, or a 400 whose error names the model
    """
    if status_code == 404:
        return True
    if status_code != 400 or not isinstance(error_body, dict):
        return False

    error = error_body.get("error")
    if not isinstance(error, dict):
        return False
    return error.get("code") == "model_not_found" or error.get("param") == "model"


def extract_output_text(data: dict) -> str:
    """Pull the generated text out of a Responses API payload."""
    if not isinstance(data, dict):
        return ""
    if data.get("output_text"):
        return data["output_text"]

    parts = []
    for item in data.get("output") or []:
        if item.get("type", "message") != "message":
            continue
        for content in item.get("content") or []:
            if content.get("type") == "output_text" and content.get("text"):
                parts.append(content["text"])
    return "".join(parts)


def parse_media_query(text: str) -> MediaQuery:
    """Parse model output into a MediaQuery.

    Raises:
        ModelOutputError: If the text is empty, not JSON, or off-schema
    """
    if not text or not text.strip():
        raise ModelOutputError("Empty model response")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ModelOutputError("Model returned non-JSON output") from e

    if not isinstance(payload, dict):
        raise ModelOutputError("Model returned non-JSON output")

    try:
        return MediaQuery.model_validate(payload)
    except ValidationError as e:
        raise ModelOutputError("Model output did not match the response schema") from e


class ModelQueryClient:
    """Client for an OpenAI-compatible Responses API.

    Models are tried strictly in order; only a model-unavailable failure moves
    on to the next one.
    """

    def __init__(
        self,
        api_key: Optional[str],
        models: List[str],
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize model client.

        Args:
            api_key: Provider API key (omitted from requests when empty)
            models: Model identifiers in the order they are tried
            base_url: API base URL
            timeout: Per-request timeout in seconds
            http_client: Pre-built HTTP client (tests inject a mock transport)
        """
        if not models:
            raise ValueError("At least one model must be configured")

        self.api_key = api_key
        self.models = list(models)
        self.base_url = base_url.rstrip("/")
        self.client = http_client or httpx.AsyncClient(timeout=timeout)
        logger.info("Initialized model client", models=self.models, base_url=self.base_url)

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()

    async def _call_model(self, model: str, question: str) -> dict:
        headers = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        body = {
            "model": model,
            "input": [
                {"role": "system", "content": build_system_prompt()},
                {"role": "user", "content": question},
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": RESPONSE_SCHEMA["name"],
                    "schema": RESPONSE_SCHEMA["schema"],
                    "strict": RESPONSE_SCHEMA["strict"],
                }
            },
        }

        try:
            response = await self.client.post(
                f"{self.base_url}/responses", json=body, headers=headers
            )
        except httpx.HTTPError as e:
            raise ModelServiceError(f"Model request failed: {e}") from e

        if response.is_success:
            try:
                return response.json()
            except ValueError as e:
                raise ModelServiceError("Model service returned malformed JSON") from e

        try:
            error_body = response.json()
        except ValueError:
            error_body = None

        message = f"Model API error: {response.status_code}"
        if isinstance(error_body, dict) and isinstance(error_body.get("error"), dict):
            message = error_body["error"].get("message") or message

        if is_model_unavailable(response.status_code, error_body):
            raise ModelUnavailableError(model, message)
        raise ModelServiceError(message)

    async def identify(self, question: str) -> MediaQuery:
        """Ask the model to identify the content a question refers to.

        Never raises; failures are returned as ``status="error"`` results.

        Args:
            question: Free-text question from the user

        Returns:
            MediaQuery from the model, or an error MediaQuery
        """

        def log_fallback(retry_state):
            error = retry_state.outcome.exception()
            logger.warning("Model unavailable, trying next", model=error.model, error=str(error))

        retrying = AsyncRetrying(
            stop=stop_after_attempt(len(self.models)),
            retry=retry_if_exception_type(ModelUnavailableError),
            before_sleep=log_fallback,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    model = self.models[attempt.retry_state.attempt_number - 1]
                    logger.debug("Calling model", model=model)
                    data = await self._call_model(model, question)
        except ModelUnavailableError as e:
            logger.error("No configured model available", tried=self.models, error=str(e))
            return MediaQuery.error(
                f"Requested model not available. Tried: {', '.join(self.models)}"
            )
        except ModelServiceError as e:
            logger.error("Error calling model", error=str(e))
            return MediaQuery.error(str(e) or "Upstream error")

        try:
            result = parse_media_query(extract_output_text(data))
        except ModelOutputError as e:
            logger.warning("Unusable model output", model=model, error=str(e))
            return MediaQuery.error(str(e))

        logger.info(
            "Model identified media",
            model=model,
            status=result.status,
            type=result.type,
        )
        return result
