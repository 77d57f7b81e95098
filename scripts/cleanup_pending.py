#!/usr/bin/env python3
"""
Clean up expired pending registrations.

Expired rows are already refused at verification time; this only keeps
the table lean. Run periodically (e.g., hourly cron job).

Usage:
    python scripts/cleanup_pending.py
    python scripts/cleanup_pending.py --stats
"""

import argparse
import asyncio
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import get_settings
from app.db.database import get_async_url
from app.db.models import PendingVerificationModel

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def get_pending_stats(session: AsyncSession, now: datetime) -> dict:
    """Count pending registrations by state."""
    total = await session.scalar(select(func.count()).select_from(PendingVerificationModel))
    expired = await session.scalar(
        select(func.count())
        .select_from(PendingVerificationModel)
        .where(PendingVerificationModel.expires_at <= now)
    )
    return {
        "total_entries": total or 0,
        "expired_entries": expired or 0,
        "active_entries": (total or 0) - (expired or 0),
    }


async def cleanup_expired(session: AsyncSession, now: datetime) -> int:
    """Delete expired pending registrations."""
    result = await session.execute(
        delete(PendingVerificationModel).where(PendingVerificationModel.expires_at <= now)
    )
    return result.rowcount


async def main_async(stats_only: bool = False) -> None:
    """Main async function."""
    settings = get_settings()
    engine = create_async_engine(
        get_async_url(settings.database_url),
        echo=False,
    )
    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    now = datetime.now(timezone.utc)
    try:
        async with session_maker() as session:
            stats = await get_pending_stats(session, now)

            logger.info("Pending Registration Statistics:")
            logger.info(f"  Total entries: {stats['total_entries']:,}")
            logger.info(f"  Active entries: {stats['active_entries']:,}")
            logger.info(f"  Expired entries: {stats['expired_entries']:,}")

            if stats_only:
                return

            if stats["expired_entries"] == 0:
                logger.info("No expired entries to clean up.")
                return

            deleted = await cleanup_expired(session, now)
            await session.commit()

            logger.info(f"Cleaned up {deleted:,} expired pending registrations.")
    finally:
        await engine.dispose()


def main():
    parser = argparse.ArgumentParser(
        description="Clean up expired pending registrations"
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Only show statistics, don't clean up",
    )

    args = parser.parse_args()
    asyncio.run(main_async(stats_only=args.stats))


if __name__ == "__main__":
    main()
