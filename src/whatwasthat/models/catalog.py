"""Catalog search and detail models."""

from dataclasses import dataclass, field
from typing import List, Literal, Optional

MediaKind = Literal["movie", "tv"]


@dataclass(frozen=True)
class CandidateResult:
    """A raw TMDB search hit."""

    id: int
    title: str  # "title" for movies, "name" for shows
    vote_count: int = 0
    vote_average: float = 0.0
    date: Optional[str] = None  # release_date or first_air_date
    origin_country: List[str] = field(default_factory=list)

    @classmethod
    def from_search_hit(cls, hit: dict, kind: MediaKind) -> "CandidateResult":
        """Build a candidate from one element of a search ``results`` array.

        Raises:
            TypeError: If the hit is not a JSON object
            KeyError: If the hit has no id
            ValueError: If the hit has no title
        """
        if not isinstance(hit, dict):
            raise TypeError(f"Search hit is not an object: {hit!r}")

        if kind == "movie":
            title = hit.get("title") or ""
            date = hit.get("release_date")
        else:
            title = hit.get("name") or ""
            date = hit.get("first_air_date")

        # An empty title would count as contained in every search title
        if not isinstance(title, str) or not title.strip():
            raise ValueError(f"Search hit {hit.get('id')!r} has no title")

        return cls(
            id=hit["id"],
            title=title,
            vote_count=hit.get("vote_count") or 0,
            vote_average=hit.get("vote_average") or 0.0,
            date=date or None,
            origin_country=list(hit.get("origin_country") or []),
        )

    @property
    def year(self) -> Optional[int]:
        """Year of the release/first-air date, if it can be parsed."""
        if not self.date or len(self.date) < 4 or not self.date[:4].isdigit():
            return None
        return int(self.date[:4])


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate with its relevance score for one search."""

    candidate: CandidateResult
    score: float
    search_title: str


@dataclass
class CastMember:
    """Credited cast member."""

    name: Optional[str] = None
    character: Optional[str] = None
    profile_path: Optional[str] = None


@dataclass
class MovieDetail:
    """Projection of a TMDB movie detail response."""

    id: int
    title: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    runtime: Optional[int] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    genres: List[Optional[str]] = field(default_factory=list)
    cast: List[CastMember] = field(default_factory=list)
    director: Optional[str] = None
    trailer: Optional[str] = None


@dataclass
class ShowDetail:
    """Projection of a TMDB TV show detail response."""

    id: int
    name: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    first_air_date: Optional[str] = None
    last_air_date: Optional[str] = None
    number_of_seasons: Optional[int] = None
    number_of_episodes: Optional[int] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    genres: List[Optional[str]] = field(default_factory=list)
    networks: List[Optional[str]] = field(default_factory=list)
    cast: List[CastMember] = field(default_factory=list)
    created_by: List[Optional[str]] = field(default_factory=list)
    trailer: Optional[str] = None


@dataclass
class EpisodeDetail:
    """Projection of a TMDB episode detail response."""

    id: int
    name: Optional[str] = None
    overview: Optional[str] = None
    still_path: Optional[str] = None
    air_date: Optional[str] = None
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    runtime: Optional[int] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
