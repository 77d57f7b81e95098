"""
Comment endpoints. Reading is public; posting needs a user session.
"""

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from app.api.deps import CurrentAdminDep, CurrentUserDep, SessionDep
from app.models.schemas import CommentListResponse, CommentResponse, format_comment
from app.services.comment_service import CommentService


router = APIRouter()


class AddCommentRequest(BaseModel):
    """Client-sent usernames are not accepted; the author comes from the session."""

    movieId: Optional[str] = None
    comment: Optional[str] = None


@router.get("/", response_model=CommentListResponse)
async def list_all_comments(admin: CurrentAdminDep, session: SessionDep):
    """Admin-only listing of every comment."""
    comments = await CommentService(session).list_all()
    return CommentListResponse(
        count=len(comments),
        comments=[format_comment(c) for c in comments],
    )


@router.post("/add", response_model=CommentResponse)
async def add_comment(request: AddCommentRequest, current_user: CurrentUserDep, session: SessionDep):
    comment = await CommentService(session).add(
        current_user.id,
        request.movieId,
        request.comment,
    )
    return CommentResponse(comment=format_comment(comment))


@router.get("/{movie_id}", response_model=CommentListResponse)
async def list_movie_comments(movie_id: str, session: SessionDep):
    """Comments for one title, newest first. No login required."""
    comments = await CommentService(session).list_for_movie(movie_id)
    return CommentListResponse(
        count=len(comments),
        comments=[format_comment(c) for c in comments],
    )
