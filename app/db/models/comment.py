"""
Movie comments and admin replies.
"""

from uuid import uuid4

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.database import Base
from app.db.models.base import CreatedAtMixin, TimestampMixin


COMMENT_MAX_LENGTH = 500


class CommentModel(TimestampMixin, Base):
    """
    A user comment on one OMDb title.

    ``username`` is copied from the author at write time; later renames do
    not rewrite old comments.
    """

    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(
        String,
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    movie_id: Mapped[str] = mapped_column(
        String,
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    username: Mapped[str] = mapped_column(
        String,
        nullable=False,
    )
    text: Mapped[str] = mapped_column(
        String(COMMENT_MAX_LENGTH),
        nullable=False,
    )

    replies: Mapped[list["CommentReplyModel"]] = relationship(
        "CommentReplyModel",
        back_populates="comment",
        cascade="all, delete-orphan",
        order_by="CommentReplyModel.position",
        lazy="selectin",
    )


class CommentReplyModel(CreatedAtMixin, Base):
    """Admin reply, identified only by its slot in the parent's reply list."""

    __tablename__ = "comment_replies"

    comment_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("comments.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
    )
    admin_name: Mapped[str] = mapped_column(
        String,
        nullable=False,
    )
    reply_text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    comment: Mapped["CommentModel"] = relationship(
        "CommentModel",
        back_populates="replies",
    )
