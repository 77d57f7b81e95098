"""
Watchlist ("My List") service.
"""

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ValidationError
from app.db.models import WatchlistEntryModel


logger = logging.getLogger(__name__)


class WatchlistService:
    """Per-user saved titles, at most one entry per (user, external id)."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_entry(self, user_id: str, external_id: str) -> Optional[WatchlistEntryModel]:
        result = await self.session.execute(
            select(WatchlistEntryModel).where(
                WatchlistEntryModel.user_id == user_id,
                WatchlistEntryModel.external_id == external_id,
            )
        )
        return result.scalar_one_or_none()

    async def add(
        self,
        user_id: str,
        external_id: Optional[str],
        title: Optional[str] = None,
        poster: Optional[str] = None,
        year: Optional[str] = None,
        media_type: Optional[str] = None,
        rating: Optional[str] = None,
        runtime: Optional[str] = None,
    ) -> tuple[Optional[WatchlistEntryModel], bool]:
        """
        Save a title to the user's list.

        The unique constraint on (user_id, external_id) is the source of
        truth: losing an insert race to a concurrent request is treated the
        same as finding the entry up front.

        Returns:
            (entry, created) where created is False if it was already saved

        Raises:
            ValidationError: If external_id is missing
        """
        external_id = (external_id or "").strip()
        if not external_id:
            raise ValidationError("imdbID required")

        existing = await self.get_entry(user_id, external_id)
        if existing:
            return existing, False

        entry = WatchlistEntryModel(
            user_id=user_id,
            external_id=external_id,
            title=title,
            poster=poster,
            year=year,
            media_type=media_type,
            rating=rating,
            runtime=runtime,
        )
        self.session.add(entry)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            logger.info(f"Concurrent add of {external_id} for user {user_id}, keeping existing entry")
            return await self.get_entry(user_id, external_id), False

        return entry, True

    async def list_entries(self, user_id: str) -> list[WatchlistEntryModel]:
        """All saved titles for a user, newest first."""
        result = await self.session.execute(
            select(WatchlistEntryModel)
            .where(WatchlistEntryModel.user_id == user_id)
            .order_by(WatchlistEntryModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def remove(self, user_id: str, external_id: str) -> bool:
        """
        Delete a saved title. Removing an absent title is not an error.

        Returns:
            True if a row was deleted
        """
        result = await self.session.execute(
            delete(WatchlistEntryModel).where(
                WatchlistEntryModel.user_id == user_id,
                WatchlistEntryModel.external_id == external_id,
            )
        )
        return result.rowcount > 0

    async def exists(self, user_id: str, external_id: str) -> bool:
        return await self.get_entry(user_id, external_id) is not None
