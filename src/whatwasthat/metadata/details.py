"""Fetch TMDB details and project them into detail models."""

from typing import Optional

import structlog

from whatwasthat.metadata.tmdb import CatalogError, TMDBClient
from whatwasthat.models.catalog import CastMember, EpisodeDetail, MovieDetail, ShowDetail

logger = structlog.get_logger(__name__)

TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
CAST_LIMIT = 5
TRAILER_SITE = "YouTube"

# Malformed payloads surface as these while projecting
PROJECTION_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


class DetailFetcher:
    """Retrieves movie, show and episode details.

    Every fetch returns None instead of raising when the lookup fails.
    """

    def __init__(self, tmdb_client: TMDBClient, image_base_url: str = TMDB_IMAGE_BASE_URL):
        self.tmdb_client = tmdb_client
        self.image_base_url = image_base_url.rstrip("/")

    def image_url(self, path: Optional[str], size: str = "w500") -> Optional[str]:
        """Build a full image URL from a TMDB image path."""
        if not path:
            return None
        return f"{self.image_base_url}/{size}{path}"

    def _cast(self, data: dict) -> list[CastMember]:
        cast = (data.get("credits") or {}).get("cast") or []
        return [
            CastMember(
                name=person.get("name"),
                character=person.get("character"),
                profile_path=self.image_url(person.get("profile_path"), "w185"),
            )
            for person in cast[:CAST_LIMIT]
        ]

    @staticmethod
    def _director(data: dict) -> Optional[str]:
        crew = (data.get("credits") or {}).get("crew") or []
        return next((person.get("name") for person in crew if person.get("job") == "Director"), None)

    @staticmethod
    def _trailer(data: dict) -> Optional[str]:
        videos = (data.get("videos") or {}).get("results") or []
        return next(
            (
                video.get("key")
                for video in videos
                if video.get("type") == "Trailer" and video.get("site") == TRAILER_SITE
            ),
            None,
        )

    @staticmethod
    def _names(items: Optional[list]) -> list[Optional[str]]:
        return [item.get("name") for item in items or []]

    async def fetch_movie(self, tmdb_id: int) -> Optional[MovieDetail]:
        """Fetch and project movie details.

        Args:
            tmdb_id: TMDB movie ID

        Returns:
            MovieDetail, or None if the lookup failed
        """
        try:
            data = await self.tmdb_client.get_movie(tmdb_id)
            if data is None:
                return None

            return MovieDetail(
                id=data["id"],
                title=data.get("title"),
                overview=data.get("overview"),
                poster_path=self.image_url(data.get("poster_path"), "w500"),
                backdrop_path=self.image_url(data.get("backdrop_path"), "w1280"),
                release_date=data.get("release_date"),
                runtime=data.get("runtime"),
                vote_average=data.get("vote_average"),
                vote_count=data.get("vote_count"),
                genres=self._names(data.get("genres")),
                cast=self._cast(data),
                director=self._director(data),
                trailer=self._trailer(data),
            )
        except (CatalogError, *PROJECTION_ERRORS) as e:
            logger.warning("TMDB movie details error", tmdb_id=tmdb_id, error=str(e))
            return None

    async def fetch_show(self, tmdb_id: int) -> Optional[ShowDetail]:
        """Fetch and project TV show details.

        Args:
            tmdb_id: TMDB TV show ID

        Returns:
            ShowDetail, or None if the lookup failed
        """
        try:
            data = await self.tmdb_client.get_tv_show(tmdb_id)
            if data is None:
                return None

            return ShowDetail(
                id=data["id"],
                name=data.get("name"),
                overview=data.get("overview"),
                poster_path=self.image_url(data.get("poster_path"), "w500"),
                backdrop_path=self.image_url(data.get("backdrop_path"), "w1280"),
                first_air_date=data.get("first_air_date"),
                last_air_date=data.get("last_air_date"),
                number_of_seasons=data.get("number_of_seasons"),
                number_of_episodes=data.get("number_of_episodes"),
                vote_average=data.get("vote_average"),
                vote_count=data.get("vote_count"),
                genres=self._names(data.get("genres")),
                networks=self._names(data.get("networks")),
                cast=self._cast(data),
                created_by=self._names(data.get("created_by")),
                trailer=self._trailer(data),
            )
        except (CatalogError, *PROJECTION_ERRORS) as e:
            logger.warning("TMDB TV details error", tmdb_id=tmdb_id, error=str(e))
            return None

    async def fetch_episode(
        self,
        tmdb_id: int,
        season_number: int,
        episode_number: int,
    ) -> Optional[EpisodeDetail]:
        """Fetch and project a single episode.

        Args:
            tmdb_id: TMDB TV show ID
            season_number: Season number
            episode_number: Episode number within the season

        Returns:
            EpisodeDetail, or None if the lookup failed
        """
        try:
            data = await self.tmdb_client.get_episode(tmdb_id, season_number, episode_number)
            if data is None:
                return None

            return EpisodeDetail(
                id=data["id"],
                name=data.get("name"),
                overview=data.get("overview"),
                still_path=self.image_url(data.get("still_path"), "w500"),
                air_date=data.get("air_date"),
                season_number=data.get("season_number"),
                episode_number=data.get("episode_number"),
                runtime=data.get("runtime"),
                vote_average=data.get("vote_average"),
                vote_count=data.get("vote_count"),
            )
        except (CatalogError, *PROJECTION_ERRORS) as e:
            logger.warning(
                "TMDB episode details error",
                tmdb_id=tmdb_id,
                season=season_number,
                episode=episode_number,
                error=str(e),
            )
            return None
