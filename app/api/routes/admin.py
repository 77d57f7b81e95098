"""
Admin endpoints: session, user moderation and comment moderation.
"""

from typing import Optional

from fastapi import APIRouter, Response
from pydantic import BaseModel

from app.api.deps import CurrentAdminDep, SessionDep
from app.config import settings
from app.core.auth import ADMIN_COOKIE
from app.models.schemas import (
    CommentListResponse,
    CommentResponse,
    MessageResponse,
    UserListResponse,
    UserResponse,
    format_comment,
    format_user,
)
from app.services.admin_service import AdminService, admin_login
from app.services.comment_service import CommentService


router = APIRouter()


class AdminLoginRequest(BaseModel):
    """Plain strings: compared byte-for-byte against configuration."""

    email: str
    password: str


class ReplyRequest(BaseModel):
    replyText: Optional[str] = None


class AdminClaims(BaseModel):
    email: Optional[str]
    name: Optional[str]


class AdminSessionResponse(BaseModel):
    success: bool = True
    admin: AdminClaims


@router.post("/login", response_model=MessageResponse)
async def login(request: AdminLoginRequest, response: Response):
    """
    Log in as the configured admin.

    Sets the HTTP-only ``adminToken`` cookie, separate from the user cookie.
    """
    token = admin_login(request.email, request.password)
    response.set_cookie(
        key=ADMIN_COOKIE,
        value=token,
        max_age=settings.session_max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return MessageResponse(message="Admin logged in successfully")


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    response.delete_cookie(
        key=ADMIN_COOKIE,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return MessageResponse(message="Admin logged out")


@router.get("/session", response_model=AdminSessionResponse)
async def session_info(admin: CurrentAdminDep):
    """Confirm the admin session is still valid."""
    return AdminSessionResponse(admin=AdminClaims(email=admin.email, name=admin.name))


# ============ User moderation ============

@router.get("/users", response_model=UserListResponse)
async def list_users(admin: CurrentAdminDep, session: SessionDep):
    users = await AdminService(session).list_users()
    return UserListResponse(count=len(users), users=[format_user(u) for u in users])


@router.put("/ban/{user_id}", response_model=UserResponse)
@router.put("/users/ban/{user_id}", response_model=UserResponse, include_in_schema=False)
async def toggle_ban(user_id: str, admin: CurrentAdminDep, session: SessionDep):
    """Ban or unban a user. Takes effect on the user's next request."""
    user = await AdminService(session).toggle_ban(user_id)
    return UserResponse(
        message="User has been banned" if user.is_banned else "User unbanned successfully",
        user=format_user(user),
    )


# ============ Comment moderation ============

@router.get("/comments", response_model=CommentListResponse)
async def list_comments(admin: CurrentAdminDep, session: SessionDep):
    comments = await CommentService(session).list_all()
    return CommentListResponse(
        count=len(comments),
        comments=[format_comment(c) for c in comments],
    )


@router.delete("/comments/{comment_id}", response_model=MessageResponse)
async def delete_comment(comment_id: str, admin: CurrentAdminDep, session: SessionDep):
    await CommentService(session).delete(comment_id)
    return MessageResponse(message="Comment deleted successfully")


@router.post("/comments/reply/{comment_id}", response_model=CommentResponse)
async def reply_to_comment(
    comment_id: str,
    request: ReplyRequest,
    admin: CurrentAdminDep,
    session: SessionDep,
):
    """Append a reply signed with the configured admin name."""
    comment = await CommentService(session).reply(
        comment_id,
        request.replyText,
        admin.name or settings.admin_name,
    )
    return CommentResponse(message="Reply added successfully", comment=format_comment(comment))
