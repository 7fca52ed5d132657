"""Unit tests for detail fetching and projection."""

import pytest

from whatwasthat.metadata.details import DetailFetcher
from whatwasthat.metadata.tmdb import CatalogAuthError, CatalogLookupError


@pytest.fixture
def fetcher(mock_tmdb_client):
    """Detail fetcher over the mocked TMDB client."""
    return DetailFetcher(mock_tmdb_client)


class TestFetchMovie:
    """Test movie detail projection."""

    @pytest.mark.asyncio
    async def test_projects_movie(self, fetcher, mock_tmdb_client, matrix_detail):
        """Cast is truncated; director and trailer are resolved."""
        mock_tmdb_client.get_movie.return_value = matrix_detail

        movie = await fetcher.fetch_movie(603)

        mock_tmdb_client.get_movie.assert_awaited_once_with(603)
        assert movie.id == 603
        assert movie.title == "The Matrix"
        assert movie.poster_path == "https://image.tmdb.org/t/p/w500/poster.jpg"
        assert movie.backdrop_path == "https://image.tmdb.org/t/p/w1280/backdrop.jpg"
        assert movie.genres == ["Action", "Science Fiction"]
        assert [member.name for member in movie.cast] == [f"Actor {i}" for i in range(5)]
        assert movie.cast[0].profile_path == "https://image.tmdb.org/t/p/w185/p0.jpg"
        assert movie.director == "Lana Wachowski"
        assert movie.trailer == "yt-trailer"

    @pytest.mark.asyncio
    async def test_missing_credits_and_videos(self, fetcher, mock_tmdb_client):
        """Absent sub-resources give empty cast and null director/trailer."""
        mock_tmdb_client.get_movie.return_value = {"id": 1, "title": "Heat"}

        movie = await fetcher.fetch_movie(1)

        assert movie.cast == []
        assert movie.director is None
        assert movie.trailer is None
        assert movie.poster_path is None

    @pytest.mark.asyncio
    async def test_not_found_returns_none(self, fetcher, mock_tmdb_client):
        """A 404 surfaces as None from the client and from the fetcher."""
        assert await fetcher.fetch_movie(404) is None

    @pytest.mark.asyncio
    async def test_lookup_error_returns_none(self, fetcher, mock_tmdb_client):
        """Request failures are swallowed into None."""
        mock_tmdb_client.get_movie.side_effect = CatalogLookupError("boom", status_code=500)

        assert await fetcher.fetch_movie(1) is None

    @pytest.mark.asyncio
    async def test_malformed_payload_returns_none(self, fetcher, mock_tmdb_client):
        """A payload without an id cannot be projected."""
        mock_tmdb_client.get_movie.return_value = {"title": "Heat", "genres": "bad"}

        assert await fetcher.fetch_movie(1) is None

    @pytest.mark.asyncio
    async def test_unnamed_entries_kept(self, fetcher, mock_tmdb_client, matrix_detail):
        """Cast and genre entries without a name do not discard the movie."""
        matrix_detail["credits"]["cast"][0] = {"character": "Uncredited"}
        matrix_detail["genres"].append({"id": 1})
        mock_tmdb_client.get_movie.return_value = matrix_detail

        movie = await fetcher.fetch_movie(603)

        assert movie is not None
        assert movie.cast[0].name is None
        assert movie.cast[0].character == "Uncredited"
        assert movie.genres == ["Action", "Science Fiction", None]


class TestFetchShow:
    """Test TV show detail projection."""

    @pytest.mark.asyncio
    async def test_projects_show(self, fetcher, mock_tmdb_client, breaking_bad_detail):
        """Networks and creators are flattened to names."""
        mock_tmdb_client.get_tv_show.return_value = breaking_bad_detail

        show = await fetcher.fetch_show(1396)

        assert show.name == "Breaking Bad"
        assert show.networks == ["AMC"]
        assert show.created_by == ["Vince Gilligan"]
        assert show.cast[0].character == "Walter White"
        assert show.cast[0].profile_path is None
        assert show.backdrop_path is None
        assert show.trailer is None

    @pytest.mark.asyncio
    async def test_auth_error_returns_none(self, fetcher, mock_tmdb_client):
        """Rejected credentials degrade to None for the lookup."""
        mock_tmdb_client.get_tv_show.side_effect = CatalogAuthError("bad key")

        assert await fetcher.fetch_show(1396) is None


class TestFetchEpisode:
    """Test episode detail projection."""

    @pytest.mark.asyncio
    async def test_projects_episode(self, fetcher, mock_tmdb_client, fly_episode):
        """Episode still image and numbers are projected."""
        mock_tmdb_client.get_episode.return_value = fly_episode

        episode = await fetcher.fetch_episode(1396, 3, 10)

        mock_tmdb_client.get_episode.assert_awaited_once_with(1396, 3, 10)
        assert episode.name == "Fly"
        assert episode.still_path == "https://image.tmdb.org/t/p/w500/fly.jpg"
        assert (episode.season_number, episode.episode_number) == (3, 10)

    @pytest.mark.asyncio
    async def test_custom_image_base_url(self, mock_tmdb_client, fly_episode):
        """Image URLs use the configured CDN base."""
        mock_tmdb_client.get_episode.return_value = fly_episode
        fetcher = DetailFetcher(mock_tmdb_client, image_base_url="https://cdn.example/")

        episode = await fetcher.fetch_episode(1396, 3, 10)

        assert episode.still_path == "https://cdn.example/w500/fly.jpg"
