"""
JWT session and password utilities.

Two principals share one signing secret but carry non-overlapping claims:
users get ``{"id": ...}``, the configured admin gets
``{"admin": true, "email": ..., "name": ...}``. Every token also carries a
``type`` claim naming its purpose (session access, e-mail verification or
password reset).
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from app.config import settings


# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TOKEN_ACCESS = "access"
TOKEN_VERIFY = "verify"
TOKEN_RESET = "reset"

USER_COOKIE = "token"
ADMIN_COOKIE = "adminToken"


class TokenData(BaseModel):
    """Data extracted from a JWT token."""

    user_id: Optional[str] = None
    admin: bool = False
    email: Optional[str] = None
    name: Optional[str] = None
    exp: datetime
    token_type: str


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


def _encode(claims: dict, expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        **claims,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_user_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a user session token.

    Args:
        user_id: User's unique ID
        expires_delta: Override of the configured session lifetime

    Returns:
        Encoded JWT token
    """
    return _encode(
        {"id": user_id, "type": TOKEN_ACCESS},
        expires_delta or timedelta(days=settings.session_expire_days),
    )


def create_admin_token(
    email: str,
    name: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create an admin session token.

    Args:
        email: Configured admin e-mail
        name: Configured admin display name
        expires_delta: Override of the configured session lifetime

    Returns:
        Encoded JWT token
    """
    return _encode(
        {"admin": True, "email": email, "name": name, "type": TOKEN_ACCESS},
        expires_delta or timedelta(days=settings.session_expire_days),
    )


def create_verification_token(email: str) -> str:
    """Create the token e-mailed to confirm a pending registration."""
    return _encode(
        {"email": email, "type": TOKEN_VERIFY},
        timedelta(minutes=settings.verification_expire_minutes),
    )


def create_reset_token(user_id: str) -> str:
    """Create the token e-mailed for a password reset."""
    return _encode(
        {"id": user_id, "type": TOKEN_RESET},
        timedelta(minutes=settings.reset_expire_minutes),
    )


def decode_token(token: str) -> Optional[TokenData]:
    """
    Decode a JWT token and check its signature.

    Expiry is not enforced here so callers can tell an expired session
    apart from a forged one; use ``is_token_expired`` on the result.

    Args:
        token: Encoded JWT token

    Returns:
        TokenData if the signature is valid, None otherwise
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": False},
        )
        return TokenData(
            user_id=payload.get("id"),
            admin=payload.get("admin") is True,
            email=payload.get("email"),
            name=payload.get("name"),
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            token_type=payload.get("type", TOKEN_ACCESS),
        )
    except (JWTError, KeyError, TypeError, ValueError):
        return None


def is_token_expired(token_data: TokenData) -> bool:
    """Check if a token is expired."""
    return token_data.exp < datetime.now(timezone.utc)
