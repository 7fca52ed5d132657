"""Shared pytest fixtures for whatwasthat tests."""

from datetime import date
from unittest.mock import AsyncMock, Mock

import pytest

from whatwasthat.config import Config, ModelConfig, TMDBConfig
from whatwasthat.metadata.tmdb import TMDBClient
from whatwasthat.models.media import MediaQuery

TODAY = date(2024, 6, 1)


@pytest.fixture
def today():
    """Fixed reference date for recency bonuses."""
    return TODAY


@pytest.fixture
def default_config():
    """Create a configuration with both API keys set."""
    return Config(
        tmdb=TMDBConfig(api_key="tmdb-test-key"),
        model=ModelConfig(api_key="model-test-key"),
    )


@pytest.fixture
def mock_tmdb_client():
    """TMDB client double with async methods returning nothing."""
    client = Mock(spec=TMDBClient)
    client.search_movie = AsyncMock(return_value=[])
    client.search_tv = AsyncMock(return_value=[])
    client.get_movie = AsyncMock(return_value=None)
    client.get_tv_show = AsyncMock(return_value=None)
    client.get_episode = AsyncMock(return_value=None)
    return client


@pytest.fixture
def movie_query():
    """Successful movie identification."""
    return MediaQuery(
        status="success",
        type="movie",
        movie_title="The Matrix",
        timestamp="01:02:03",
        timestamp_success=True,
    )


@pytest.fixture
def series_query():
    """Successful series identification."""
    return MediaQuery(
        status="success",
        type="series",
        series_title="Breaking Bad",
        season_number=3,
        episode_number=10,
        episode_title="Fly",
        timestamp_success=False,
        timestamp_error="No exact timestamp known",
    )


@pytest.fixture
def matrix_detail():
    """TMDB movie detail payload with credits and videos."""
    return {
        "id": 603,
        "title": "The Matrix",
        "overview": "A hacker learns the truth about reality.",
        "poster_path": "/poster.jpg",
        "backdrop_path": "/backdrop.jpg",
        "release_date": "1999-03-30",
        "runtime": 136,
        "vote_average": 8.2,
        "vote_count": 24000,
        "genres": [{"id": 28, "name": "Action"}, {"id": 878, "name": "Science Fiction"}],
        "credits": {
            "cast": [
                {"name": f"Actor {i}", "character": f"Role {i}", "profile_path": f"/p{i}.jpg"}
                for i in range(8)
            ],
            "crew": [
                {"name": "Bill Pope", "job": "Director of Photography"},
                {"name": "Lana Wachowski", "job": "Director"},
                {"name": "Lilly Wachowski", "job": "Director"},
            ],
        },
        "videos": {
            "results": [
                {"key": "teaser1", "type": "Teaser", "site": "YouTube"},
                {"key": "vimeo1", "type": "Trailer", "site": "Vimeo"},
                {"key": "yt-trailer", "type": "Trailer", "site": "YouTube"},
            ]
        },
    }


@pytest.fixture
def breaking_bad_detail():
    """TMDB TV show detail payload."""
    return {
        "id": 1396,
        "name": "Breaking Bad",
        "overview": "A chemistry teacher turns to crime.",
        "poster_path": "/bb.jpg",
        "backdrop_path": None,
        "first_air_date": "2008-01-20",
        "last_air_date": "2013-09-29",
        "number_of_seasons": 5,
        "number_of_episodes": 62,
        "vote_average": 8.9,
        "vote_count": 13000,
        "genres": [{"id": 18, "name": "Drama"}],
        "networks": [{"id": 174, "name": "AMC"}],
        "created_by": [{"id": 66633, "name": "Vince Gilligan"}],
        "credits": {"cast": [{"name": "Bryan Cranston", "character": "Walter White"}]},
        "videos": {"results": []},
    }


@pytest.fixture
def fly_episode():
    """TMDB episode detail payload."""
    return {
        "id": 62101,
        "name": "Fly",
        "overview": "Walt becomes obsessed with a fly in the lab.",
        "still_path": "/fly.jpg",
        "air_date": "2010-05-23",
        "season_number": 3,
        "episode_number": 10,
        "runtime": 47,
        "vote_average": 7.4,
        "vote_count": 300,
    }
