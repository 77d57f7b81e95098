"""
User identity endpoints: registration, e-mail verification, login and profile.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Response
from pydantic import BaseModel, EmailStr, Field

from app.api.deps import CurrentUserDep, SessionDep
from app.config import settings
from app.core.auth import USER_COOKIE, create_user_token
from app.models.schemas import MessageResponse, UserResponse, format_user
from app.services.auth_service import AuthService
from app.services.email_service import send_password_reset_email, send_verification_email


router = APIRouter()


# Request/Response Models
class RegisterRequest(BaseModel):
    """Registration request."""

    username: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6, description="Minimum 6 characters")
    dob: date


class LoginRequest(BaseModel):
    """Login request."""

    email: EmailStr
    password: str


class UpdateProfileRequest(BaseModel):
    """Self-editable profile fields; anything else in the body is ignored."""

    username: Optional[str] = None
    email: Optional[EmailStr] = None
    dob: Optional[date] = None


class ForgotPasswordRequest(BaseModel):
    email: EmailStr
    dob: date


class ResetPasswordRequest(BaseModel):
    password: str = Field(..., min_length=6)


class VerifyEmailResponse(BaseModel):
    success: bool = True
    message: str
    username: Optional[str] = None


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=USER_COOKIE,
        value=token,
        max_age=settings.session_max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="none" if settings.cookie_secure else "lax",
    )


@router.post("/register", response_model=MessageResponse)
async def register(request: RegisterRequest, session: SessionDep):
    """
    Start a registration.

    No account exists until the e-mailed link is followed.
    """
    auth = AuthService(session)
    pending = await auth.register(
        username=request.username,
        email=request.email,
        password=request.password,
        dob=request.dob,
    )
    await send_verification_email(pending.email, pending.token)
    return MessageResponse(
        message="Verification email sent. Please verify to complete registration.",
    )


@router.get("/verify-email/{token}", response_model=VerifyEmailResponse)
async def verify_email(token: str, session: SessionDep):
    """Confirm a pending registration and create the account."""
    auth = AuthService(session)
    user = await auth.verify_email(token)
    if user is None:
        return VerifyEmailResponse(message="Email already verified")
    return VerifyEmailResponse(
        message="Email verified & account created successfully!",
        username=user.username,
    )


@router.post("/login", response_model=UserResponse)
async def login(request: LoginRequest, response: Response, session: SessionDep):
    """
    Login with email and password.

    Sets the HTTP-only ``token`` session cookie.
    """
    auth = AuthService(session)
    user = await auth.authenticate(request.email, request.password)
    set_session_cookie(response, create_user_token(user.id))
    return UserResponse(message="Login successful", user=format_user(user))


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    """Clear the session cookie."""
    response.delete_cookie(
        key=USER_COOKIE,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="none" if settings.cookie_secure else "lax",
    )
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserResponse)
async def get_current_user_profile(current_user: CurrentUserDep):
    """Get the current authenticated user."""
    return UserResponse(user=format_user(current_user))


@router.get("/profile", response_model=UserResponse)
async def get_profile(current_user: CurrentUserDep):
    return UserResponse(user=format_user(current_user))


@router.put("/update", response_model=UserResponse)
async def update_profile(
    request: UpdateProfileRequest,
    current_user: CurrentUserDep,
    session: SessionDep,
):
    auth = AuthService(session)
    user = await auth.update_profile(
        current_user,
        username=request.username,
        email=request.email,
        dob=request.dob,
    )
    return UserResponse(message="Profile updated", user=format_user(user))


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(request: ForgotPasswordRequest, session: SessionDep):
    """E-mail a reset link to the account matching e-mail and birth date."""
    auth = AuthService(session)
    user, token = await auth.request_password_reset(request.email, request.dob)
    await send_password_reset_email(user.email, token)
    return MessageResponse(message="Password reset instructions sent")


@router.post("/reset-password/{token}", response_model=MessageResponse)
async def reset_password(token: str, request: ResetPasswordRequest, session: SessionDep):
    auth = AuthService(session)
    await auth.reset_password(token, request.password)
    return MessageResponse(message="Password reset successful")
