"""Media identification models returned by the language model."""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class MediaQuery(BaseModel):
    """Structured identification of a free-text question.

    Exactly one of the movie or series field groups is populated when
    ``status`` is ``"success"``; the other fields are null.
    """

    model_config = ConfigDict(frozen=True)

    status: Literal["success", "error"] = "success"
    error_message: Optional[str] = None
    type: Optional[Literal["movie", "series", "none"]] = None

    movie_title: Optional[str] = None

    series_title: Optional[str] = None
    season_number: Optional[int] = Field(default=None, ge=1)
    episode_number: Optional[int] = Field(default=None, ge=1)
    episode_title: Optional[str] = None

    timestamp: Optional[str] = None
    timestamp_success: Optional[bool] = None
    timestamp_error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Whether identification succeeded."""
        return self.status == "success"

    @classmethod
    def error(cls, message: str) -> "MediaQuery":
        """Build an error result."""
        return cls(status="error", error_message=message)


class EnrichedResult(MediaQuery):
    """MediaQuery with TMDB metadata attached."""

    tmdb_data: Optional[Dict[str, Any]] = None
    episode_data: Optional[Dict[str, Any]] = None
