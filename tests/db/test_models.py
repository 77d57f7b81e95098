"""
Database model tests.
Tests model creation, relationships, and constraints.
"""

import pytest
from datetime import date, datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.db.models import (
    CommentModel,
    CommentReplyModel,
    PendingVerificationModel,
    UserModel,
    WatchlistEntryModel,
)


class TestUserModel:
    """Tests for UserModel."""

    async def test_user_defaults_after_flush(self, db_session):
        """Test generated id, flags and timestamps are filled on insert."""
        user = UserModel(
            username="carol",
            email="carol@example.com",
            password_hash="hashed",
            dob=date(2000, 2, 29),
        )
        db_session.add(user)
        await db_session.flush()

        assert user.id
        assert user.is_verified is False
        assert user.is_banned is False
        assert user.created_at is not None

    async def test_email_unique(self, db_session, test_user):
        db_session.add(UserModel(username="other", email=test_user.email, password_hash="x"))

        with pytest.raises(IntegrityError):
            await db_session.flush()

    async def test_username_unique(self, db_session, test_user):
        db_session.add(UserModel(username=test_user.username, email="new@example.com", password_hash="x"))

        with pytest.raises(IntegrityError):
            await db_session.flush()


class TestPendingVerificationModel:
    """Tests for PendingVerificationModel."""

    async def test_one_row_per_email(self, db_session):
        expires = datetime.now(timezone.utc) + timedelta(minutes=15)
        for token in ("token-a", "token-b"):
            db_session.add(
                PendingVerificationModel(
                    username="dave",
                    email="dave@example.com",
                    password_hash="hashed",
                    dob=date(1990, 1, 1),
                    token=token,
                    expires_at=expires,
                )
            )

        with pytest.raises(IntegrityError):
            await db_session.flush()


class TestWatchlistEntryModel:
    """Tests for WatchlistEntryModel."""

    async def test_same_title_once_per_user(self, db_session, test_user):
        """Test the (user, external id) pair is unique."""
        db_session.add(WatchlistEntryModel(user_id=test_user.id, external_id="tt0111161"))
        await db_session.flush()

        db_session.add(WatchlistEntryModel(user_id=test_user.id, external_id="tt0111161"))
        with pytest.raises(IntegrityError):
            await db_session.flush()

    async def test_same_title_for_different_users(self, db_session, test_user, other_user):
        db_session.add(WatchlistEntryModel(user_id=test_user.id, external_id="tt0111161"))
        db_session.add(WatchlistEntryModel(user_id=other_user.id, external_id="tt0111161"))
        await db_session.flush()

        result = await db_session.execute(
            select(WatchlistEntryModel).where(WatchlistEntryModel.external_id == "tt0111161")
        )
        assert len(result.scalars().all()) == 2


class TestCommentModel:
    """Tests for CommentModel and its replies."""

    async def test_replies_kept_in_position_order(self, db_session, test_user):
        comment = CommentModel(
            movie_id="tt0111161",
            user_id=test_user.id,
            username=test_user.username,
            text="Great film",
            replies=[],
        )
        db_session.add(comment)
        await db_session.flush()

        comment.replies.append(CommentReplyModel(position=0, admin_name="Movian Team", reply_text="first"))
        comment.replies.append(CommentReplyModel(position=1, admin_name="Movian Team", reply_text="second"))
        await db_session.flush()

        result = await db_session.execute(
            select(CommentModel)
            .where(CommentModel.id == comment.id)
            .execution_options(populate_existing=True)
        )
        loaded = result.scalar_one()

        assert [r.reply_text for r in loaded.replies] == ["first", "second"]
        assert [r.position for r in loaded.replies] == [0, 1]

    async def test_delete_removes_replies(self, db_session, test_user):
        comment = CommentModel(
            movie_id="tt0111161",
            user_id=test_user.id,
            username=test_user.username,
            text="Great film",
            replies=[CommentReplyModel(position=0, admin_name="Movian Team", reply_text="thanks")],
        )
        db_session.add(comment)
        await db_session.flush()

        await db_session.delete(comment)
        await db_session.flush()

        result = await db_session.execute(select(CommentReplyModel))
        assert result.scalars().all() == []
