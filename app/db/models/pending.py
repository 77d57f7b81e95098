"""
Pending registrations awaiting e-mail confirmation.
"""

from datetime import date, datetime
from uuid import uuid4

from sqlalchemy import Date, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.database import Base
from app.db.models.base import CreatedAtMixin


class PendingVerificationModel(CreatedAtMixin, Base):
    """
    Signup data held until the emailed link is followed.

    One row per e-mail: a new registration attempt replaces the old row.
    """

    __tablename__ = "pending_verifications"

    id: Mapped[str] = mapped_column(
        String,
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    username: Mapped[str] = mapped_column(
        String,
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String,
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(
        String,
        nullable=False,
    )
    dob: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )
    token: Mapped[str] = mapped_column(
        String,
        unique=True,
        nullable=False,
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )