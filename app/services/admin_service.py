"""
Admin service: the configured admin identity and user moderation.
"""

import logging
import secrets
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.auth import create_admin_token
from app.core.exceptions import AuthInvalidError, NotFoundError
from app.db.models import UserModel


logger = logging.getLogger(__name__)


def check_admin_credentials(email: str, password: str) -> bool:
    """
    Compare against the single configured admin identity.

    An unconfigured admin (empty e-mail or password) never matches.
    """
    if not settings.admin_email or not settings.admin_password:
        return False
    email_ok = secrets.compare_digest(email.encode(), settings.admin_email.encode())
    password_ok = secrets.compare_digest(password.encode(), settings.admin_password.encode())
    return email_ok and password_ok


def admin_login(email: str, password: str) -> str:
    """
    Log the admin in.

    Returns:
        Signed admin session token

    Raises:
        AuthInvalidError: If either field mismatches (the caller is not told which)
    """
    if not check_admin_credentials(email, password):
        logger.warning("Rejected admin login attempt")
        raise AuthInvalidError("Admin credential mismatch", "Invalid admin credentials")
    return create_admin_token(settings.admin_email, settings.admin_name)


class AdminService:
    """User moderation operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_users(self) -> list[UserModel]:
        """All users, newest first."""
        result = await self.session.execute(
            select(UserModel).order_by(UserModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def toggle_ban(self, user_id: str) -> UserModel:
        """
        Flip a user's ban flag.

        Existing sessions stay signed; the user guard re-reads the flag on
        every request, so the change applies from the next request on.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.session.get(UserModel, user_id)
        if not user:
            raise NotFoundError(f"Ban target {user_id} missing", "User not found")

        user.is_banned = not user.is_banned
        user.updated_at = datetime.now(timezone.utc)
        await self.session.flush()
        logger.info(f"User {user.id} {'banned' if user.is_banned else 'unbanned'}")
        return user
