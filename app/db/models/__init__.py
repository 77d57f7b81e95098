"""
SQLAlchemy ORM models package.

Re-exports all models for convenient imports.
"""

from app.db.models.user import UserModel
from app.db.models.pending import PendingVerificationModel
from app.db.models.watchlist import WatchlistEntryModel
from app.db.models.comment import (
    COMMENT_MAX_LENGTH,
    CommentModel,
    CommentReplyModel,
)

__all__ = [
    # User
    "UserModel",
    "PendingVerificationModel",
    # Watchlist
    "WatchlistEntryModel",
    # Comments
    "COMMENT_MAX_LENGTH",
    "CommentModel",
    "CommentReplyModel",
]
