"""
Thin proxy over the OMDb and YouTube Data APIs.
"""

import asyncio
import logging
import math
import random
import re
from typing import Any, Dict, List, Optional

import httpx

from app.config import settings
from app.core.exceptions import NotFoundError, UpstreamError, ValidationError


logger = logging.getLogger(__name__)

OMDB_PAGE_SIZE = 10

TRENDING_TITLES = [
    "Dune: Part Two",
    "Oppenheimer",
    "Poor Things",
    "The Batman",
    "Everything Everywhere All at Once",
    "Spider-Man: Across the Spider-Verse",
    "Avatar: The Way of Water",
    "Top Gun: Maverick",
]

RANDOM_KEYWORDS = ["action", "comedy", "drama", "thriller", "adventure", "sci-fi", "romance"]

SEARCH_TYPES = {"movie", "series", "episode"}


class MovieService:
    """OMDb and YouTube lookups sharing one bounded-timeout HTTP client."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def _get(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            logger.error(f"Upstream timeout for {url}: {e}")
            raise UpstreamError(f"Timeout calling {url}") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Upstream failure for {url}: {e}")
            raise UpstreamError(f"Error calling {url}: {e}") from e

    async def _omdb(self, **params: Any) -> Dict[str, Any]:
        return await self._get(
            settings.omdb_api_url,
            {**params, "apikey": settings.omdb_api_key},
        )

    async def _omdb_search(self, not_found: str, **params: Any) -> Dict[str, Any]:
        data = await self._omdb(**params)
        if data.get("Response") == "False":
            raise NotFoundError(f"OMDb search {params} empty", data.get("Error") or not_found)
        results = data.get("Search") or []
        try:
            total = int(data.get("totalResults"))
        except (TypeError, ValueError):
            total = len(results)
        return {"results": results, "totalResults": total}

    async def trending(self) -> List[Dict[str, Any]]:
        """Fetch the fixed trending list concurrently, dropping titles that fail."""

        async def fetch(title: str) -> Optional[Dict[str, Any]]:
            try:
                data = await self._omdb(t=title, type="movie")
            except UpstreamError:
                logger.warning(f"Failed to fetch trending title {title!r}")
                return None
            return data if data.get("Response") == "True" else None

        movies = await asyncio.gather(*(fetch(title) for title in TRENDING_TITLES))
        return [m for m in movies if m]

    async def get_by_id(self, imdb_id: str) -> Dict[str, Any]:
        data = await self._omdb(i=imdb_id, plot="full")
        if data.get("Response") == "False":
            raise NotFoundError(f"OMDb id {imdb_id} missing", data.get("Error") or "Movie not found")
        return data

    async def search(
        self,
        query: str,
        page: int = 1,
        year: Optional[str] = None,
        media_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        query = query.strip()
        if not query:
            raise ValidationError("Search query is required")

        params: Dict[str, Any] = {"s": query, "page": page}
        if year:
            params["y"] = year
        if media_type in SEARCH_TYPES:
            params["type"] = media_type

        found = await self._omdb_search("No results found", **params)
        return {
            **found,
            "currentPage": page,
            "hasMore": page * OMDB_PAGE_SIZE < found["totalResults"],
        }

    async def browse(self, page: int = 1, limit: int = 20, search: Optional[str] = None) -> Dict[str, Any]:
        """Paginated listing; OMDb has no 'all movies' endpoint so a keyword stands in."""
        if page < 1:
            raise ValidationError("Page number must be >= 1")
        if limit < 1 or limit > 100:
            raise ValidationError("Limit must be between 1 and 100")

        search_query = (search or "").strip() or "movie"
        found = await self._omdb_search("No movies found", s=search_query, type="movie", page=page)
        total_pages = math.ceil(found["totalResults"] / OMDB_PAGE_SIZE)
        return {
            **found,
            "currentPage": page,
            "totalPages": total_pages,
            "hasNextPage": page < total_pages,
            "hasPrevPage": page > 1,
            "searchQuery": search_query,
        }

    async def by_genre(self, genre: str, page: int = 1) -> Dict[str, Any]:
        found = await self._omdb_search(f"No {genre} movies found", s=genre, type="movie", page=page)
        total_pages = math.ceil(found["totalResults"] / OMDB_PAGE_SIZE)
        return {
            **found,
            "genre": genre,
            "currentPage": page,
            "totalPages": total_pages,
            "hasNextPage": page < total_pages,
            "hasPrevPage": page > 1,
        }

    async def random_pick(self, limit: int = 10) -> Dict[str, Any]:
        keyword = random.choice(RANDOM_KEYWORDS)
        found = await self._omdb_search("No random movies found", s=keyword, type="movie", page=1)
        movies = list(found["results"])
        random.shuffle(movies)
        picked = movies[:max(limit, 0)]
        return {"results": picked, "total": len(picked), "genre": keyword}

    async def trailer(self, title: str, year: Optional[str] = None) -> Dict[str, Any]:
        """Find an embeddable YouTube trailer for a title."""
        title = title.strip()
        if not title:
            raise ValidationError("Movie title is required")

        query = f"{title} official trailer"
        if year:
            year = re.sub(r"[^0-9]", "", year)[:4]
            if year:
                query += f" {year}"

        data = await self._get(
            settings.youtube_api_url,
            {
                "part": "snippet",
                "q": query,
                "key": settings.youtube_api_key,
                "type": "video",
                "maxResults": 1,
                "videoEmbeddable": "true",
                "safeSearch": "strict",
            },
        )
        items = data.get("items") or []
        if not items:
            raise NotFoundError(f"No trailer for {query!r}", "Trailer not found")

        video = items[0]
        snippet = video.get("snippet") or {}
        thumbnails = snippet.get("thumbnails") or {}
        thumbnail = next(
            (thumbnails[k]["url"] for k in ("high", "medium", "default") if thumbnails.get(k, {}).get("url")),
            "",
        )
        return {
            "videoId": (video.get("id") or {}).get("videoId"),
            "title": snippet.get("title"),
            "thumbnail": thumbnail,
        }
