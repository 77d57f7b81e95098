"""
Comment service: user comments per title and admin replies.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ValidationError
from app.db.models import COMMENT_MAX_LENGTH, CommentModel, CommentReplyModel, UserModel


logger = logging.getLogger(__name__)


class CommentService:
    """Create, list and moderate comments."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, user_id: str, movie_id: Optional[str], text: Optional[str]) -> CommentModel:
        """
        Post a comment as the given user.

        The username stored on the comment is looked up here, never taken
        from the request.

        Raises:
            ValidationError: Missing movie id, blank text or text over the limit
            NotFoundError: If the author no longer exists
        """
        movie_id = (movie_id or "").strip()
        text = (text or "").strip()
        if not movie_id or not text:
            raise ValidationError("Movie ID and comment text are required")
        if len(text) > COMMENT_MAX_LENGTH:
            raise ValidationError(f"Comment cannot exceed {COMMENT_MAX_LENGTH} characters")

        user = await self.session.get(UserModel, user_id)
        if not user:
            raise NotFoundError(f"Comment author {user_id} missing", "User not found")

        now = datetime.now(timezone.utc)
        comment = CommentModel(
            movie_id=movie_id,
            user_id=user.id,
            username=user.username,
            text=text,
            replies=[],
            created_at=now,
            updated_at=now,
        )
        self.session.add(comment)
        await self.session.flush()
        return comment

    async def list_for_movie(self, movie_id: str) -> list[CommentModel]:
        """Comments on one title, newest first."""
        result = await self.session.execute(
            select(CommentModel)
            .where(CommentModel.movie_id == movie_id)
            .order_by(CommentModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_all(self) -> list[CommentModel]:
        """Every comment across all titles, newest first."""
        result = await self.session.execute(
            select(CommentModel).order_by(CommentModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def get(self, comment_id: str) -> CommentModel:
        comment = await self.session.get(CommentModel, comment_id)
        if not comment:
            raise NotFoundError(f"Comment {comment_id} not found", "Comment not found")
        return comment

    async def delete(self, comment_id: str) -> None:
        """Hard-delete a comment together with its replies."""
        comment = await self.get(comment_id)
        await self.session.delete(comment)
        await self.session.flush()
        logger.info(f"Deleted comment {comment_id} on {comment.movie_id}")

    async def reply(self, comment_id: str, reply_text: Optional[str], admin_name: str) -> CommentModel:
        """
        Append an admin reply to a comment.

        Raises:
            ValidationError: If the reply is blank
            NotFoundError: If the comment does not exist
        """
        reply_text = (reply_text or "").strip()
        if not reply_text:
            raise ValidationError("Reply cannot be empty")

        comment = await self.get(comment_id)
        comment.replies.append(
            CommentReplyModel(
                position=len(comment.replies),
                admin_name=admin_name,
                reply_text=reply_text,
                created_at=datetime.now(timezone.utc),
            )
        )
        comment.updated_at = datetime.now(timezone.utc)
        await self.session.flush()
        logger.info(f"{admin_name} replied to comment {comment_id}")
        return comment
