"""Data models for whatwasthat."""

from whatwasthat.models.catalog import (
    CandidateResult,
    CastMember,
    EpisodeDetail,
    MovieDetail,
    ScoredCandidate,
    ShowDetail,
)
from whatwasthat.models.media import EnrichedResult, MediaQuery

__all__ = [
    "CandidateResult",
    "CastMember",
    "EnrichedResult",
    "EpisodeDetail",
    "MediaQuery",
    "MovieDetail",
    "ScoredCandidate",
    "ShowDetail",
]
