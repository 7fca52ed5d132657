"""TMDB API client."""

from typing import Optional

import httpx
import structlog

logger = structlog.get_logger(__name__)

TMDB_BASE_URL = "https://api.themoviedb.org/3"
DETAIL_APPEND = "credits,videos"


class CatalogError(Exception):
    """Base exception for TMDB API errors."""

    pass


class CatalogLookupError(CatalogError):
    """A single TMDB request failed (network, HTTP status or malformed body)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CatalogAuthError(CatalogError):
    """TMDB credentials are missing or rejected."""

    pass


class TMDBClient:
    """Async TMDB API client.

    Requests are issued once; there is no retry or caching layer.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = TMDB_BASE_URL,
        timeout: float = 10.0,
        language: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize TMDB client.

        Args:
            api_key: TMDB API key
            base_url: API base URL
            timeout: Per-request timeout in seconds
            language: Optional language code sent with every request
            http_client: Pre-built HTTP client (tests inject a mock transport)

        Raises:
            CatalogAuthError: If no API key is configured
        """
        if not api_key:
            logger.error("TMDB API key not configured")
            raise CatalogAuthError("TMDB API key not configured")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.language = language
        self.client = http_client or httpx.AsyncClient(timeout=timeout)
        logger.info("Initialized TMDB client", base_url=self.base_url)

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()

    async def _get(self, endpoint: str, params: Optional[dict] = None) -> dict:
        """Issue a GET request and decode the JSON body.

        None-valued params are dropped.

        Raises:
            CatalogAuthError: On HTTP 401
            CatalogLookupError: On any other request failure
        """
        query = {"api_key": self.api_key}
        if self.language:
            query["language"] = self.language
        for key, value in (params or {}).items():
            if value is not None:
                query[key] = value

        try:
            response = await self.client.get(f"{self.base_url}{endpoint}", params=query)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code == 401:
                logger.error("TMDB rejected API key", endpoint=endpoint)
                raise CatalogAuthError(f"TMDB API error: {e}") from e
            raise CatalogLookupError(f"TMDB API error: {e}", status_code=status_code) from e
        except httpx.HTTPError as e:
            logger.error("TMDB request failed", endpoint=endpoint, error=str(e))
            raise CatalogLookupError(f"TMDB request failed: {e}") from e
        except ValueError as e:
            raise CatalogLookupError(f"TMDB returned malformed JSON: {e}") from e

        if not isinstance(data, dict):
            raise CatalogLookupError("TMDB returned an unexpected response shape")
        return data

    async def _get_detail(self, endpoint: str, params: Optional[dict] = None) -> Optional[dict]:
        try:
            return await self._get(endpoint, params)
        except CatalogLookupError as e:
            if e.status_code == 404:
                logger.warning("Not found on TMDB", endpoint=endpoint)
                return None
            logger.error(
                "TMDB API error",
                endpoint=endpoint,
                status_code=e.status_code,
                error=str(e),
            )
            raise

    async def search_movie(self, query: str, year: Optional[int] = None) -> list[dict]:
        """Search for movies on TMDB.

        Args:
            query: Search query (movie title)
            year: Optional year to filter results

        Returns:
            List of movie search results (may be empty)
        """
        data = await self._get("/search/movie", {"query": query, "year": year or None})
        results = data.get("results") or []
        logger.info(
            "Searched TMDB for movie",
            query=query,
            year=year,
            result_count=len(results),
        )
        return results

    async def search_tv(self, query: str, year: Optional[int] = None) -> list[dict]:
        """Search for TV shows on TMDB.

        Args:
            query: Search query (show title)
            year: Optional first-air year to filter results

        Returns:
            List of TV show search results (may be empty)
        """
        data = await self._get(
            "/search/tv", {"query": query, "first_air_date_year": year or None}
        )
        results = data.get("results") or []
        logger.info(
            "Searched TMDB for TV show",
            query=query,
            year=year,
            result_count=len(results),
        )
        return results

    async def get_movie(self, tmdb_id: int) -> Optional[dict]:
        """Get movie details with credits and videos.

        Returns:
            Movie details, or None if not found
        """
        data = await self._get_detail(
            f"/movie/{tmdb_id}", {"append_to_response": DETAIL_APPEND}
        )
        if data is not None:
            logger.info("Fetched movie from TMDB", tmdb_id=tmdb_id, title=data.get("title"))
        return data

    async def get_tv_show(self, tmdb_id: int) -> Optional[dict]:
        """Get TV show details with credits and videos.

        Returns:
            TV show details, or None if not found
        """
        data = await self._get_detail(f"/tv/{tmdb_id}", {"append_to_response": DETAIL_APPEND})
        if data is not None:
            logger.info("Fetched TV show from TMDB", tmdb_id=tmdb_id, title=data.get("name"))
        return data

    async def get_episode(
        self,
        tmdb_id: int,
        season_number: int,
        episode_number: int,
    ) -> Optional[dict]:
        """Get a single episode of a TV show.

        Returns:
            Episode details, or None if not found
        """
        data = await self._get_detail(
            f"/tv/{tmdb_id}/season/{season_number}/episode/{episode_number}"
        )
        if data is not None:
            logger.info(
                "Fetched episode from TMDB",
                tmdb_id=tmdb_id,
                season=season_number,
                episode=episode_number,
                title=data.get("name"),
            )
        return data
