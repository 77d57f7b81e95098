"""
API tests for the OMDb/YouTube proxy endpoints.
Upstream calls go through an httpx.MockTransport; nothing leaves the process.
"""

import pytest

import httpx
from fastapi import status

from app.api.deps import get_http_client
from app.main import app


SHAWSHANK = {
    "Title": "The Shawshank Redemption",
    "Year": "1994",
    "imdbID": "tt0111161",
    "Type": "movie",
    "Response": "True",
}


def omdb_handler(request: httpx.Request) -> httpx.Response:
    params = request.url.params
    if request.url.host == "www.googleapis.com":
        if "Nothing" in params["q"]:
            return httpx.Response(200, json={"items": []})
        return httpx.Response(
            200,
            json={
                "items": [
                    {
                        "id": {"videoId": "6hB3S9bIaco"},
                        "snippet": {
                            "title": "The Shawshank Redemption Trailer",
                            "thumbnails": {"high": {"url": "https://img.youtube.com/hq.jpg"}},
                        },
                    }
                ]
            },
        )

    assert params["apikey"] == "test-omdb-key"
    if params.get("i") == "tt0111161":
        return httpx.Response(200, json=SHAWSHANK)
    if params.get("i"):
        return httpx.Response(200, json={"Response": "False", "Error": "Incorrect IMDb ID."})
    if params.get("s") == "zzzz":
        return httpx.Response(200, json={"Response": "False", "Error": "Movie not found!"})
    if params.get("s"):
        return httpx.Response(
            200,
            json={"Search": [SHAWSHANK], "totalResults": "25", "Response": "True"},
        )
    if params.get("t") == "Oppenheimer":
        return httpx.Response(500)
    if params.get("t"):
        return httpx.Response(200, json={**SHAWSHANK, "Title": params["t"]})
    return httpx.Response(400)


def timeout_handler(request: httpx.Request) -> httpx.Response:
    raise httpx.ReadTimeout("timed out", request=request)


@pytest.fixture
def mock_upstream():
    """Route outbound calls to a handler; yields a setter to swap it."""
    state = {"handler": omdb_handler}

    async def override_get_http_client():
        transport = httpx.MockTransport(lambda request: state["handler"](request))
        async with httpx.AsyncClient(transport=transport) as client:
            yield client

    app.dependency_overrides[get_http_client] = override_get_http_client
    yield lambda handler: state.update(handler=handler)
    app.dependency_overrides.pop(get_http_client, None)


class TestMovieDetail:
    """Tests for GET /api/movies/movie/{id}."""

    @pytest.mark.asyncio
    async def test_found(self, test_client, mock_upstream):
        response = await test_client.get("/api/movies/movie/tt0111161")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["movie"]["Title"] == "The Shawshank Redemption"

    @pytest.mark.asyncio
    async def test_not_found(self, test_client, mock_upstream):
        response = await test_client.get("/api/movies/movie/tt0000000")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"success": False, "message": "Incorrect IMDb ID."}

    @pytest.mark.asyncio
    async def test_upstream_timeout(self, test_client, mock_upstream):
        mock_upstream(timeout_handler)

        response = await test_client.get("/api/movies/movie/tt0111161")

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()["success"] is False


class TestSearchAndBrowse:
    """Tests for search, browse and genre listings."""

    @pytest.mark.asyncio
    async def test_search(self, test_client, mock_upstream):
        response = await test_client.get("/api/movies/search/shawshank", params={"page": 2})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["totalResults"] == 25
        assert data["currentPage"] == 2
        assert data["hasMore"] is True

    @pytest.mark.asyncio
    async def test_search_no_results(self, test_client, mock_upstream):
        response = await test_client.get("/api/movies/search/zzzz")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_browse(self, test_client, mock_upstream):
        response = await test_client.get("/api/movies/all", params={"page": 3})

        data = response.json()
        assert data["totalPages"] == 3
        assert data["hasNextPage"] is False
        assert data["hasPrevPage"] is True
        assert data["searchQuery"] == "movie"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}])
    async def test_browse_bad_paging(self, test_client, mock_upstream, params):
        response = await test_client.get("/api/movies/all", params=params)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio
    async def test_genre(self, test_client, mock_upstream):
        response = await test_client.get("/api/movies/genre/drama")

        data = response.json()
        assert data["genre"] == "drama"
        assert data["results"][0]["imdbID"] == "tt0111161"

    @pytest.mark.asyncio
    async def test_random(self, test_client, mock_upstream):
        response = await test_client.get("/api/movies/random", params={"limit": 1})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["total"] == 1


class TestTrending:
    """Tests for GET /api/movies/trending."""

    @pytest.mark.asyncio
    async def test_failed_titles_dropped(self, test_client, mock_upstream):
        response = await test_client.get("/api/movies/trending")

        assert response.status_code == status.HTTP_200_OK
        titles = [m["Title"] for m in response.json()["results"]]
        assert "Oppenheimer" not in titles
        assert "Dune: Part Two" in titles


class TestTrailer:
    """Tests for GET /api/movies/trailer/{title}/{year}."""

    @pytest.mark.asyncio
    async def test_trailer(self, test_client, mock_upstream):
        response = await test_client.get("/api/movies/trailer/The Shawshank Redemption/1994")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["videoId"] == "6hB3S9bIaco"
        assert data["thumbnail"] == "https://img.youtube.com/hq.jpg"

    @pytest.mark.asyncio
    async def test_trailer_not_found(self, test_client, mock_upstream):
        response = await test_client.get("/api/movies/trailer/Nothing Here")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Trailer not found"
