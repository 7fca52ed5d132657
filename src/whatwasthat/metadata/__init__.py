"""Metadata resolution components for whatwasthat.

This package matches a language model's title guess against TMDB and
projects the matched movie, show and episode details.
"""

from whatwasthat.metadata.details import DetailFetcher
from whatwasthat.metadata.enricher import EnrichmentError, MediaEnricher
from whatwasthat.metadata.matcher import MediaMatcher
from whatwasthat.metadata.tmdb import (
    CatalogAuthError,
    CatalogError,
    CatalogLookupError,
    TMDBClient,
)

__all__ = [
    "CatalogAuthError",
    "CatalogError",
    "CatalogLookupError",
    "DetailFetcher",
    "EnrichmentError",
    "MediaEnricher",
    "MediaMatcher",
    "TMDBClient",
]
