"""
API route dependencies: database session, user and admin guards.
"""

from typing import Annotated, AsyncGenerator, Optional

import httpx
from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.auth import ADMIN_COOKIE, TOKEN_ACCESS, USER_COOKIE, TokenData, decode_token, is_token_expired
from app.core.exceptions import (
    AuthInvalidError,
    AuthRequiredError,
    ForbiddenError,
    NotFoundError,
)
from app.db.database import get_db_session
from app.db.models import UserModel
from app.services.auth_service import AuthService
from app.services.movie_service import MovieService


# Bearer header is a fallback; the cookies are the primary carrier
optional_security = HTTPBearer(auto_error=False)


async def get_current_user(
    token: Annotated[Optional[str], Cookie(alias=USER_COOKIE)] = None,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
    session: AsyncSession = Depends(get_db_session),
) -> UserModel:
    """
    Dependency to get the current authenticated user.

    Admin tokens are refused outright, and the ban flag is read from the
    database on every call rather than trusted from the token.
    """
    if not token and credentials:
        token = credentials.credentials

    if not token:
        raise AuthRequiredError("No user token presented")

    token_data = decode_token(token)
    if not token_data:
        raise AuthInvalidError("User token failed verification")

    if is_token_expired(token_data):
        raise AuthInvalidError("User token expired", "Session expired. Please log in again.")

    if token_data.admin:
        raise AuthInvalidError(
            "Admin token presented on a user route",
            "Admins cannot access normal user routes.",
        )

    if token_data.token_type != TOKEN_ACCESS or not token_data.user_id:
        raise AuthInvalidError(f"Non-session token of type {token_data.token_type}")

    auth_service = AuthService(session)
    user = await auth_service.get_user_by_id(token_data.user_id)

    if not user:
        raise NotFoundError(
            f"Token for missing user {token_data.user_id}",
            "User account no longer exists.",
        )

    if user.is_banned:
        raise ForbiddenError(f"Banned user {user.id} rejected", "Your account has been banned.")

    return user


async def get_current_admin(
    admin_token: Annotated[Optional[str], Cookie(alias=ADMIN_COOKIE)] = None,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
) -> TokenData:
    """
    Dependency to get the current admin claims.

    Messages are deliberately coarse so a caller cannot tell which check failed.
    """
    if not admin_token and credentials:
        admin_token = credentials.credentials

    if not admin_token:
        raise AuthRequiredError("No admin token presented", "Admin token missing")

    token_data = decode_token(admin_token)
    if not token_data or is_token_expired(token_data):
        raise AuthInvalidError("Admin token failed verification", "Unauthorized")

    if not token_data.admin or token_data.token_type != TOKEN_ACCESS:
        raise ForbiddenError("Token without admin claim on admin route", "Not authorized")

    return token_data


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Outbound HTTP client with a bounded timeout."""
    async with httpx.AsyncClient(timeout=settings.upstream_timeout_seconds) as client:
        yield client


def get_movie_service(client: httpx.AsyncClient = Depends(get_http_client)) -> MovieService:
    return MovieService(client)


# Dependency annotations
SessionDep = Annotated[AsyncSession, Depends(get_db_session)]
CurrentUserDep = Annotated[UserModel, Depends(get_current_user)]
CurrentAdminDep = Annotated[TokenData, Depends(get_current_admin)]
MovieServiceDep = Annotated[MovieService, Depends(get_movie_service)]
