"""Relevance scoring for TMDB search results.

Scores are only comparable within a single search. Recency bonuses depend on
the ``today`` argument, so the same candidate can score differently on
different dates.
"""

import re
from dataclasses import dataclass
from datetime import date

from whatwasthat.models.catalog import CandidateResult

UK_MARKER = re.compile(r"\(UK\)|\bUK\b")
US_MARKER = re.compile(r"\(US\)|\bUS\b")


@dataclass(frozen=True)
class ScoreWeights:
    """Scoring weights and the early-exit threshold calibrated against them.

    ``confidence_threshold`` is tuned so that an exact title match alone
    reaches it; change it together with ``exact_match``.
    """

    exact_match: float = 100.0
    partial_match: float = 50.0
    vote_count_divisor: float = 100.0
    max_vote_count_points: float = 20.0
    vote_average_multiplier: float = 2.0

    movie_recent_years: int = 5
    movie_recent_bonus: float = 10.0

    region_match_bonus: float = 30.0
    uk_original_max_year: int = 2005
    uk_original_bonus: float = 20.0
    show_recent_years: int = 10
    show_recent_bonus: float = 5.0

    confidence_threshold: float = 100.0


DEFAULT_WEIGHTS = ScoreWeights()


def _title_score(candidate_title: str, search_title: str, weights: ScoreWeights) -> float:
    # Exact match also counts as containment, so a perfect match gets both
    candidate = candidate_title.lower()
    search = search_title.lower()

    score = 0.0
    if candidate == search:
        score += weights.exact_match
    if search in candidate or candidate in search:
        score += weights.partial_match
    return score


def _popularity_score(candidate: CandidateResult, weights: ScoreWeights) -> float:
    return (
        min(candidate.vote_count / weights.vote_count_divisor, weights.max_vote_count_points)
        + candidate.vote_average * weights.vote_average_multiplier
    )


def score_movie(
    candidate: CandidateResult,
    original_title: str,
    search_title: str,
    today: date,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> float:
    """Score a movie search result.

    Args:
        candidate: Search hit to score
        original_title: Title before normalization (unused for movies)
        search_title: Title variant the search was issued with
        today: Reference date for the recency bonus
        weights: Scoring weights

    Returns:
        Non-negative relevance score
    """
    score = _title_score(candidate.title, search_title, weights)
    score += _popularity_score(candidate, weights)

    year = candidate.year
    if year is not None and year >= today.year - weights.movie_recent_years:
        score += weights.movie_recent_bonus

    return score


def score_show(
    candidate: CandidateResult,
    original_title: str,
    search_title: str,
    today: date,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> float:
    """Score a TV show search result.

    Region markers in the original title ("(UK)", "UK", "(US)", "US") prefer
    the matching regional version; UK requests also prefer shows that first
    aired on or before 2005. Without a region marker, recent shows get a
    small bonus instead.

    Args:
        candidate: Search hit to score
        original_title: Title before normalization, checked for region markers
        search_title: Title variant the search was issued with
        today: Reference date for the recency bonus
        weights: Scoring weights

    Returns:
        Non-negative relevance score
    """
    score = _title_score(candidate.title, search_title, weights)
    score += _popularity_score(candidate, weights)

    year = candidate.year
    if UK_MARKER.search(original_title):
        if "GB" in candidate.origin_country:
            score += weights.region_match_bonus
        if year is not None and year <= weights.uk_original_max_year:
            score += weights.uk_original_bonus
    elif US_MARKER.search(original_title):
        if "US" in candidate.origin_country:
            score += weights.region_match_bonus
    elif year is not None and year >= today.year - weights.show_recent_years:
        score += weights.show_recent_bonus

    return score
