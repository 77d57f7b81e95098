"""
Tests for the expired pending-registration cleanup script.
"""

from datetime import date, datetime, timedelta, timezone

from sqlalchemy import select

from app.db.models import PendingVerificationModel
from scripts.cleanup_pending import cleanup_expired, get_pending_stats


def pending(email, expires_at):
    return PendingVerificationModel(
        username=email.split("@")[0],
        email=email,
        password_hash="hashed",
        dob=date(1990, 1, 1),
        token=f"token-{email}",
        expires_at=expires_at,
    )


async def test_cleanup_removes_only_expired(db_session):
    now = datetime.now(timezone.utc)
    db_session.add(pending("stale@example.com", now - timedelta(minutes=1)))
    db_session.add(pending("fresh@example.com", now + timedelta(minutes=10)))
    await db_session.flush()

    stats = await get_pending_stats(db_session, now)
    assert stats == {"total_entries": 2, "expired_entries": 1, "active_entries": 1}

    deleted = await cleanup_expired(db_session, now)

    assert deleted == 1
    result = await db_session.execute(select(PendingVerificationModel.email))
    assert result.scalars().all() == ["fresh@example.com"]
