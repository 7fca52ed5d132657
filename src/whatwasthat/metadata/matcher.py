"""Best-match selection across title variants."""

from datetime import date
from typing import Callable, Optional

import structlog

from whatwasthat.metadata.normalizer import title_variants
from whatwasthat.metadata.scoring import DEFAULT_WEIGHTS, ScoreWeights, score_movie, score_show
from whatwasthat.metadata.tmdb import CatalogError, TMDBClient
from whatwasthat.models.catalog import CandidateResult, MediaKind, ScoredCandidate

logger = structlog.get_logger(__name__)

# Shows get a wider window: regional remakes produce near-duplicate titles
TOP_RESULTS = {"movie": 5, "tv": 10}


class MediaMatcher:
    """Picks the single best TMDB search hit for a noisy title."""

    def __init__(
        self,
        tmdb_client: TMDBClient,
        weights: ScoreWeights = DEFAULT_WEIGHTS,
        today: Callable[[], date] = date.today,
    ):
        """Initialize matcher.

        Args:
            tmdb_client: TMDB API client
            weights: Scoring weights and early-exit threshold
            today: Clock used for recency bonuses
        """
        self.tmdb_client = tmdb_client
        self.weights = weights
        self.today = today

    async def best_match(
        self,
        title: str,
        year: Optional[int] = None,
        kind: MediaKind = "movie",
    ) -> Optional[CandidateResult]:
        """Search every title variant in order and return the best candidate.

        Stops as soon as a candidate reaches the confidence threshold. A
        failing search for one variant is skipped. Candidates scoring zero
        are never returned, so "nothing found" and "only zero-score hits"
        both give None.

        Args:
            title: Raw title from the language model
            year: Optional release/first-air year filter
            kind: "movie" or "tv"

        Returns:
            Best candidate, or None when nothing scored above zero
        """
        search = self.tmdb_client.search_movie if kind == "movie" else self.tmdb_client.search_tv
        scorer = score_movie if kind == "movie" else score_show
        top_k = TOP_RESULTS[kind]
        today = self.today()

        best: Optional[ScoredCandidate] = None
        candidates_seen = 0

        for search_title in title_variants(title):
            try:
                hits = await search(search_title, year=year)
            except CatalogError as e:
                logger.warning(
                    "TMDB search failed, trying next variant",
                    kind=kind,
                    query=search_title,
                    error=str(e),
                )
                continue

            for hit in hits[:top_k]:
                try:
                    candidate = CandidateResult.from_search_hit(hit, kind)
                except (KeyError, TypeError, ValueError) as e:
                    logger.debug("Skipping malformed search hit", kind=kind, error=str(e))
                    continue

                candidates_seen += 1
                score = scorer(candidate, title, search_title, today, self.weights)
                if score > (best.score if best else 0):
                    best = ScoredCandidate(candidate, score, search_title)

            if best and best.score >= self.weights.confidence_threshold:
                break

        if best is None:
            logger.info(
                "No TMDB match",
                kind=kind,
                title=title,
                candidates_seen=candidates_seen,
            )
            return None

        logger.info(
            "Matched TMDB candidate",
            kind=kind,
            title=title,
            search_title=best.search_title,
            tmdb_id=best.candidate.id,
            matched_title=best.candidate.title,
            score=round(best.score, 2),
        )
        return best.candidate
