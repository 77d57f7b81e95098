"""
Pydantic schemas shared by API responses.

Field names follow the frontend's camelCase contract.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.db.models import CommentModel, CommentReplyModel, UserModel, WatchlistEntryModel


def format_datetime(dt: Optional[datetime]) -> Optional[str]:
    """Format datetime to ISO string."""
    return dt.isoformat() if dt else None


# ============ Generic ============

class MessageResponse(BaseModel):
    """Bare success/failure envelope."""

    success: bool = True
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Shape of every rejected request."""

    success: bool = False
    message: str


# ============ User Schemas ============

class UserPublic(BaseModel):
    """User as exposed to clients (never includes the password hash)."""

    id: str
    username: str
    email: str
    dob: Optional[date] = None
    isVerified: bool
    isBanned: bool
    createdAt: Optional[str] = None


def format_user(user: UserModel) -> UserPublic:
    return UserPublic(
        id=user.id,
        username=user.username,
        email=user.email,
        dob=user.dob,
        isVerified=user.is_verified,
        isBanned=user.is_banned,
        createdAt=format_datetime(user.created_at),
    )


class UserResponse(BaseModel):
    """Single user response."""

    success: bool = True
    message: Optional[str] = None
    user: UserPublic


class UserListResponse(BaseModel):
    """Admin user listing."""

    success: bool = True
    count: int
    users: List[UserPublic]


# ============ Watchlist Schemas ============

class WatchlistEntry(BaseModel):
    """A saved title."""

    id: str
    imdbID: str = Field(..., description="OMDb identifier")
    title: Optional[str] = None
    poster: Optional[str] = None
    year: Optional[str] = None
    type: Optional[str] = None
    imdbRating: Optional[str] = None
    runtime: Optional[str] = None
    createdAt: Optional[str] = None


def format_entry(entry: WatchlistEntryModel) -> WatchlistEntry:
    return WatchlistEntry(
        id=entry.id,
        imdbID=entry.external_id,
        title=entry.title,
        poster=entry.poster,
        year=entry.year,
        type=entry.media_type,
        imdbRating=entry.rating,
        runtime=entry.runtime,
        createdAt=format_datetime(entry.created_at),
    )


class WatchlistAddResponse(BaseModel):
    """Add result; ``movie`` is absent when the title was already saved."""

    success: bool = True
    message: Optional[str] = None
    movie: Optional[WatchlistEntry] = None


class WatchlistResponse(BaseModel):
    success: bool = True
    list: List[WatchlistEntry]


class WatchlistCheckResponse(BaseModel):
    success: bool = True
    exists: bool


# ============ Comment Schemas ============

class Reply(BaseModel):
    """Admin reply embedded in a comment."""

    adminName: str
    replyText: str
    createdAt: Optional[str] = None


class Comment(BaseModel):
    """Comment with its replies in insertion order."""

    id: str
    movieId: str
    userId: str
    username: str
    text: str
    replies: List[Reply] = Field(default_factory=list)
    createdAt: Optional[str] = None


def format_reply(reply: CommentReplyModel) -> Reply:
    return Reply(
        adminName=reply.admin_name,
        replyText=reply.reply_text,
        createdAt=format_datetime(reply.created_at),
    )


def format_comment(comment: CommentModel) -> Comment:
    return Comment(
        id=comment.id,
        movieId=comment.movie_id,
        userId=comment.user_id,
        username=comment.username,
        text=comment.text,
        replies=[format_reply(r) for r in comment.replies],
        createdAt=format_datetime(comment.created_at),
    )


class CommentResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    comment: Comment


class CommentListResponse(BaseModel):
    success: bool = True
    count: int
    comments: List[Comment]
