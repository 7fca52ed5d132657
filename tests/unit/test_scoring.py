"""Unit tests for candidate scoring."""

import pytest

from whatwasthat.metadata.scoring import ScoreWeights, score_movie, score_show
from whatwasthat.models.catalog import CandidateResult


def make_candidate(title, **kwargs):
    return CandidateResult(id=1, title=title, **kwargs)


class TestScoreMovie:
    """Test movie scoring rules."""

    def test_exact_match_scores_150(self, today):
        """Exact match also counts as containment."""
        candidate = make_candidate("The Matrix")

        assert score_movie(candidate, "The Matrix", "the matrix", today) == 150

    def test_exact_match_uses_search_variant(self, today):
        """Title equality is checked against the search variant, not the raw title."""
        candidate = make_candidate("Matrix")

        assert score_movie(candidate, "The Matrix (1999)", "Matrix", today) == 150

    def test_containment_either_direction(self, today):
        """Substring in either direction earns the partial bonus."""
        assert score_movie(make_candidate("The Matrix Reloaded"), "x", "Matrix", today) == 50
        assert score_movie(make_candidate("Matrix"), "x", "The Matrix", today) == 50

    def test_unrelated_title_scores_zero(self, today):
        """No title overlap and no popularity gives zero."""
        assert score_movie(make_candidate("Heat"), "Alien", "Alien", today) == 0

    def test_popularity_caps_vote_count(self, today):
        """Vote count contributes at most 20; vote average is doubled."""
        candidate = make_candidate("Heat", vote_count=5000, vote_average=8.0)

        assert score_movie(candidate, "Alien", "Alien", today) == pytest.approx(36.0)

    def test_recent_release_bonus(self, today):
        """Releases within five years of today get +10."""
        recent = make_candidate("Heat", date="2019-07-01")
        old = make_candidate("Heat", date="2018-12-31")

        assert score_movie(recent, "x", "y", today) == 10
        assert score_movie(old, "x", "y", today) == 0

    def test_unparseable_date_ignored(self, today):
        """Garbage dates do not earn the recency bonus."""
        candidate = make_candidate("Heat", date="unknown")

        assert score_movie(candidate, "x", "y", today) == 0


class TestScoreShow:
    """Test TV show scoring rules."""

    def test_uk_marker_prefers_old_british_show(self, today):
        """UK requests reward GB origin and first air date up to 2005."""
        candidate = make_candidate(
            "The Office", origin_country=["GB"], date="1999-01-01"
        )

        score = score_show(candidate, "The Office (UK)", "The Office", today)

        assert score == 150 + 30 + 20

    def test_uk_marker_without_gb_origin(self, today):
        """The old-show bonus applies even without GB origin."""
        candidate = make_candidate(
            "The Office", origin_country=["US"], date="2005-03-24"
        )

        assert score_show(candidate, "The Office (UK)", "The Office", today) == 150 + 20

    def test_bare_uk_word_counts_as_marker(self, today):
        """The word UK without parentheses selects the UK branch."""
        candidate = make_candidate("Office", origin_country=["GB"], date="2020-01-01")

        assert score_show(candidate, "Office UK", "Office", today) == 150 + 30

    def test_uk_inside_word_is_not_a_marker(self, today):
        """Titles merely containing the letters UK use the generic branch."""
        candidate = make_candidate("Ukulele Stories", origin_country=["GB"], date="2020-01-01")

        assert score_show(candidate, "UKULELE", "Nothing", today) == 5

    def test_us_marker_prefers_american_show(self, today):
        """US requests reward US origin and skip the recency bonus."""
        us_version = make_candidate("The Office", origin_country=["US"], date="2020-01-01")
        gb_version = make_candidate("The Office", origin_country=["GB"], date="2020-01-01")

        assert score_show(us_version, "The Office (US)", "The Office", today) == 180
        assert score_show(gb_version, "The Office (US)", "The Office", today) == 150

    def test_generic_recency_bonus(self, today):
        """Without a region marker, shows from the last ten years get +5."""
        recent = make_candidate("Severance", date="2022-02-18")
        boundary = make_candidate("Severance", date="2014-01-01")
        old = make_candidate("Severance", date="2013-12-31")

        assert score_show(recent, "Severance", "Severance", today) == 155
        assert score_show(boundary, "Severance", "Severance", today) == 155
        assert score_show(old, "Severance", "Severance", today) == 150

    def test_custom_weights(self, today):
        """Weights are applied from the ScoreWeights instance."""
        weights = ScoreWeights(exact_match=10, partial_match=1)
        candidate = make_candidate("Dark")

        assert score_show(candidate, "Dark", "Dark", today, weights) == 11
