"""
Authentication service for user registration, verification and login.
"""

import logging
import secrets
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.auth import (
    TOKEN_RESET,
    TOKEN_VERIFY,
    create_reset_token,
    create_verification_token,
    decode_token,
    hash_password,
    is_token_expired,
    verify_password,
)
from app.core.exceptions import AuthInvalidError, ForbiddenError, ValidationError
from app.db.models import PendingVerificationModel, UserModel


logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def as_utc(dt: datetime) -> datetime:
    """SQLite hands back naive datetimes; treat them as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


class AuthService:
    """Service for authentication and user management."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        dob: date,
    ) -> PendingVerificationModel:
        """
        Start a registration by storing a pending record.

        Any earlier pending record for the same e-mail is replaced, so at
        most one verification link per address is ever live.

        Args:
            username: Requested username
            email: User's email address
            password: Plain text password
            dob: Date of birth

        Returns:
            Created PendingVerificationModel (holds the verification token)

        Raises:
            ValidationError: If email already belongs to a confirmed user
        """
        email = normalize_email(email)
        username = username.strip()
        if not username:
            raise ValidationError("All fields are required")

        if await self.get_user_by_email(email):
            raise ValidationError("Email is already registered")

        await self.session.execute(
            delete(PendingVerificationModel).where(PendingVerificationModel.email == email)
        )

        now = datetime.now(timezone.utc)
        pending = PendingVerificationModel(
            username=username,
            email=email,
            password_hash=hash_password(password),
            dob=dob,
            token=create_verification_token(email),
            expires_at=now + timedelta(minutes=settings.verification_expire_minutes),
            created_at=now,
        )
        self.session.add(pending)
        await self.session.flush()
        logger.info(f"Pending registration stored for {email}")
        return pending

    async def verify_email(self, token: str) -> Optional[UserModel]:
        """
        Consume a pending registration and create the confirmed user.

        Returns:
            The created user, or None if the e-mail was already confirmed

        Raises:
            ValidationError: If the token or its pending record is invalid or expired
        """
        token_data = decode_token(token)
        if (
            not token_data
            or token_data.token_type != TOKEN_VERIFY
            or is_token_expired(token_data)
        ):
            raise ValidationError("Invalid or expired token")

        result = await self.session.execute(
            select(PendingVerificationModel).where(PendingVerificationModel.token == token)
        )
        pending = result.scalar_one_or_none()
        if not pending:
            raise ValidationError("Verification link expired or invalid")

        if as_utc(pending.expires_at) <= datetime.now(timezone.utc):
            await self.session.delete(pending)
            # Committed here: the request itself fails and would roll this back
            await self.session.commit()
            raise ValidationError("Verification link expired or invalid")

        if await self.get_user_by_email(pending.email):
            await self.session.delete(pending)
            await self.session.flush()
            return None

        username = pending.username
        if await self.get_user_by_username(username):
            username = f"{pending.username}_{secrets.randbelow(9000) + 1000}"
            logger.info(f"Username {pending.username} taken, using {username}")

        now = datetime.now(timezone.utc)
        user = UserModel(
            username=username,
            email=pending.email,
            password_hash=pending.password_hash,
            dob=pending.dob,
            is_verified=True,
            is_banned=False,
            created_at=now,
            updated_at=now,
        )
        self.session.add(user)
        await self.session.delete(pending)
        await self.session.flush()
        logger.info(f"Verified {user.email} as user {user.id}")
        return user

    async def authenticate(self, email: str, password: str) -> UserModel:
        """
        Check login credentials.

        Raises:
            AuthInvalidError: On unknown e-mail or wrong password
            ForbiddenError: If the account is banned
        """
        user = await self.get_user_by_email(normalize_email(email))
        if not user or not verify_password(password, user.password_hash):
            raise AuthInvalidError("Bad login credentials", "Invalid credentials")

        if user.is_banned:
            raise ForbiddenError(
                f"Banned user {user.id} attempted login",
                "Your account has been banned",
            )
        return user

    async def get_user_by_id(self, user_id: str) -> Optional[UserModel]:
        """Get user by ID."""
        return await self.session.get(UserModel, user_id)

    async def get_user_by_email(self, email: str) -> Optional[UserModel]:
        """Get user by email."""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        return result.scalar_one_or_none()

    async def get_user_by_username(self, username: str) -> Optional[UserModel]:
        """Get user by username."""
        result = await self.session.execute(
            select(UserModel).where(UserModel.username == username)
        )
        return result.scalar_one_or_none()

    async def update_profile(
        self,
        user: UserModel,
        username: Optional[str] = None,
        email: Optional[str] = None,
        dob: Optional[date] = None,
    ) -> UserModel:
        """Update the self-editable profile fields."""
        if username is not None:
            username = username.strip()
            if not username:
                raise ValidationError("Username cannot be empty")
            other = await self.get_user_by_username(username)
            if other and other.id != user.id:
                raise ValidationError("Username is already taken")
            user.username = username

        if email is not None:
            email = normalize_email(email)
            other = await self.get_user_by_email(email)
            if other and other.id != user.id:
                raise ValidationError("Email is already registered")
            user.email = email

        if dob is not None:
            user.dob = dob

        user.updated_at = datetime.now(timezone.utc)
        await self.session.flush()
        return user

    async def request_password_reset(self, email: str, dob: date) -> tuple[UserModel, str]:
        """
        Issue a reset token for the account matching both e-mail and birth date.

        Raises:
            ValidationError: If no account matches
        """
        user = await self.get_user_by_email(normalize_email(email))
        if not user or user.dob != dob:
            raise ValidationError("No account found with provided details")
        return user, create_reset_token(user.id)

    async def reset_password(self, token: str, new_password: str) -> UserModel:
        """
        Set a new password using a reset token.

        Raises:
            ValidationError: If the token is invalid/expired or the user is gone
        """
        token_data = decode_token(token)
        if (
            not token_data
            or token_data.token_type != TOKEN_RESET
            or not token_data.user_id
            or is_token_expired(token_data)
        ):
            raise ValidationError("Invalid or expired token")

        user = await self.get_user_by_id(token_data.user_id)
        if not user:
            raise ValidationError("User not found")

        user.password_hash = hash_password(new_password)
        user.updated_at = datetime.now(timezone.utc)
        await self.session.flush()
        logger.info(f"Password reset for user {user.id}")
        return user
