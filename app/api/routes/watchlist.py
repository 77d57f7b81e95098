"""
Watchlist ("My List") endpoints. All require a user session.
"""

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from app.api.deps import CurrentUserDep, SessionDep
from app.models.schemas import (
    MessageResponse,
    WatchlistAddResponse,
    WatchlistCheckResponse,
    WatchlistResponse,
    format_entry,
)
from app.services.watchlist_service import WatchlistService


router = APIRouter()


class AddToListRequest(BaseModel):
    """Title to save, with the OMDb display fields the list page renders."""

    imdbID: Optional[str] = None
    title: Optional[str] = None
    poster: Optional[str] = None
    year: Optional[str] = None
    type: Optional[str] = None
    imdbRating: Optional[str] = None
    runtime: Optional[str] = None


@router.post("/add", response_model=WatchlistAddResponse)
async def add_to_list(request: AddToListRequest, current_user: CurrentUserDep, session: SessionDep):
    """Save a title. Saving a title twice succeeds without a duplicate."""
    entry, created = await WatchlistService(session).add(
        current_user.id,
        request.imdbID,
        title=request.title,
        poster=request.poster,
        year=request.year,
        media_type=request.type,
        rating=request.imdbRating,
        runtime=request.runtime,
    )
    if not created:
        return WatchlistAddResponse(message="Already in your list")
    return WatchlistAddResponse(movie=format_entry(entry))


@router.get("/all", response_model=WatchlistResponse)
async def get_list(current_user: CurrentUserDep, session: SessionDep):
    entries = await WatchlistService(session).list_entries(current_user.id)
    return WatchlistResponse(list=[format_entry(e) for e in entries])


@router.delete("/remove/{external_id}", response_model=MessageResponse)
async def remove_from_list(external_id: str, current_user: CurrentUserDep, session: SessionDep):
    await WatchlistService(session).remove(current_user.id, external_id)
    return MessageResponse()


@router.get("/check/{external_id}", response_model=WatchlistCheckResponse)
async def check_in_list(external_id: str, current_user: CurrentUserDep, session: SessionDep):
    exists = await WatchlistService(session).exists(current_user.id, external_id)
    return WatchlistCheckResponse(exists=exists)
