"""Question lookup service: identify with the model, then enrich from TMDB."""

from typing import Union

import structlog

from whatwasthat.config import Config
from whatwasthat.llm.client import ModelQueryClient
from whatwasthat.metadata.details import DetailFetcher
from whatwasthat.metadata.enricher import MediaEnricher
from whatwasthat.metadata.matcher import MediaMatcher
from whatwasthat.metadata.tmdb import TMDBClient
from whatwasthat.models.media import EnrichedResult, MediaQuery

logger = structlog.get_logger(__name__)


class LookupService:
    """Answers "what is this scene from" questions."""

    def __init__(self, model_client: ModelQueryClient, enricher: MediaEnricher, tmdb_client=None):
        """Initialize lookup service.

        Args:
            model_client: Language model client
            enricher: TMDB enrichment orchestrator
            tmdb_client: TMDB client to close on shutdown, if owned by the service
        """
        self.model_client = model_client
        self.enricher = enricher
        self.tmdb_client = tmdb_client

    @classmethod
    def from_config(cls, config: Config) -> "LookupService":
        """Build the service and its HTTP clients from configuration.

        Raises:
            CatalogAuthError: If no TMDB API key is configured
        """
        tmdb_client = TMDBClient(
            config.tmdb.api_key,
            base_url=config.tmdb.base_url,
            timeout=config.tmdb.timeout_seconds,
            language=config.tmdb.language,
        )
        enricher = MediaEnricher(
            MediaMatcher(tmdb_client),
            DetailFetcher(tmdb_client, image_base_url=config.tmdb.image_base_url),
        )
        model_client = ModelQueryClient(
            config.model.api_key,
            config.model.models_to_try,
            base_url=config.model.base_url,
            timeout=config.model.timeout_seconds,
        )
        return cls(model_client, enricher, tmdb_client=tmdb_client)

    async def aclose(self):
        """Close owned HTTP clients."""
        await self.model_client.close()
        if self.tmdb_client is not None:
            await self.tmdb_client.close()

    async def lookup_and_enrich(self, question: str) -> Union[MediaQuery, EnrichedResult]:
        """Identify the content a question refers to and attach TMDB metadata.

        Args:
            question: Free-text question

        Returns:
            Enriched result, or an error MediaQuery if identification failed
        """
        logger.info("Looking up question", question=question)

        try:
            result = await self.model_client.identify(question)
        except Exception as e:
            logger.exception("Unexpected identification failure", error=str(e))
            return MediaQuery.error(str(e) or "Upstream error")

        if not result.is_success:
            logger.info("Identification failed", error_message=result.error_message)
            return result

        return await self.enricher.enrich(result)
