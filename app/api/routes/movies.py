"""
Movie catalogue endpoints proxied to OMDb and YouTube.
"""

from typing import Optional

from fastapi import APIRouter, Query

from app.api.deps import MovieServiceDep


router = APIRouter()


@router.get("/trending")
async def trending(movies: MovieServiceDep):
    results = await movies.trending()
    return {"success": True, "results": results, "total": len(results)}


@router.get("/movie/{imdb_id}")
async def get_movie(imdb_id: str, movies: MovieServiceDep):
    return {"success": True, "movie": await movies.get_by_id(imdb_id)}


@router.get("/search/{query}")
async def search(
    query: str,
    movies: MovieServiceDep,
    page: int = Query(1, ge=1),
    year: Optional[str] = None,
    type: Optional[str] = None,
):
    return {"success": True, **await movies.search(query, page=page, year=year, media_type=type)}


@router.get("/all")
async def browse(
    movies: MovieServiceDep,
    page: int = 1,
    limit: int = 20,
    search: Optional[str] = None,
):
    """Paginated listing; page and limit are range-checked by the service."""
    return {"success": True, **await movies.browse(page=page, limit=limit, search=search)}


@router.get("/genre/{genre}")
async def by_genre(genre: str, movies: MovieServiceDep, page: int = Query(1, ge=1)):
    return {"success": True, **await movies.by_genre(genre, page=page)}


@router.get("/random")
async def random_movies(movies: MovieServiceDep, limit: int = Query(10, ge=1, le=10)):
    return {"success": True, **await movies.random_pick(limit=limit)}


@router.get("/trailer/{title}")
@router.get("/trailer/{title}/{year}")
async def trailer(title: str, movies: MovieServiceDep, year: Optional[str] = None):
    return {"success": True, **await movies.trailer(title, year)}
