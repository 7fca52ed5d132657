"""Enrichment of model identifications with TMDB metadata."""

from dataclasses import asdict
from typing import Optional, Union

import structlog

from whatwasthat.metadata.details import DetailFetcher
from whatwasthat.metadata.matcher import MediaMatcher
from whatwasthat.models.media import EnrichedResult, MediaQuery

logger = structlog.get_logger(__name__)


class EnrichmentError(Exception):
    """A query could not be enriched."""

    pass


class MediaEnricher:
    """Orchestrates matching and detail fetching for one identification."""

    def __init__(self, matcher: MediaMatcher, details: DetailFetcher):
        """Initialize enricher.

        Args:
            matcher: Best-match selector
            details: Detail fetcher for the chosen match
        """
        self.matcher = matcher
        self.details = details

    async def enrich(self, query: MediaQuery) -> Union[MediaQuery, EnrichedResult]:
        """Attach TMDB metadata to a successful identification.

        Error results are returned unchanged. Enrichment never raises: if it
        fails as a whole, the original query is returned.

        Args:
            query: Identification from the language model

        Returns:
            EnrichedResult, or ``query`` itself when not enriched
        """
        if not query.is_success:
            return query

        try:
            tmdb_data, episode_data = await self._enrich(query)
        except Exception as e:
            logger.warning(
                "Error enriching media data",
                type=query.type,
                error=str(e),
                error_type=type(e).__name__,
            )
            return query

        return EnrichedResult(
            **query.model_dump(exclude={"tmdb_data", "episode_data"}),
            tmdb_data=tmdb_data,
            episode_data=episode_data,
        )

    async def _enrich(self, query: MediaQuery) -> tuple[Optional[dict], Optional[dict]]:
        if query.type == "movie":
            if not query.movie_title:
                raise EnrichmentError("Movie identification without movie_title")

            match = await self.matcher.best_match(query.movie_title, kind="movie")
            if match is None:
                return None, None

            movie = await self.details.fetch_movie(match.id)
            return (asdict(movie) if movie else None), None

        if query.type == "series":
            if not query.series_title:
                raise EnrichmentError("Series identification without series_title")

            match = await self.matcher.best_match(query.series_title, kind="tv")
            if match is None:
                return None, None

            show = await self.details.fetch_show(match.id)

            episode = None
            if query.season_number and query.episode_number:
                episode = await self.details.fetch_episode(
                    match.id, query.season_number, query.episode_number
                )

            return (asdict(show) if show else None), (asdict(episode) if episode else None)

        logger.debug("Nothing to enrich", type=query.type)
        return None, None
