"""
Watchlist ("My List") entries.
"""

from typing import Optional
from uuid import uuid4

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.database import Base
from app.db.models.base import TimestampMixin


class WatchlistEntryModel(TimestampMixin, Base):
    """A saved OMDb title with the display fields needed to render it."""

    __tablename__ = "watchlist_entries"
    __table_args__ = (
        UniqueConstraint("user_id", "external_id", name="uq_watchlist_user_external"),
    )

    id: Mapped[str] = mapped_column(
        String,
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    user_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    external_id: Mapped[str] = mapped_column(
        String,
        nullable=False,
    )
    title: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    poster: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    year: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    media_type: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    rating: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    runtime: Mapped[Optional[str]] = mapped_column(String, nullable=True)
