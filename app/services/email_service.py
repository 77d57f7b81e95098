"""
Outbound e-mail for verification and password-reset links.
"""

import logging
import smtplib
from email.mime.text import MIMEText
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from app.config import settings


logger = logging.getLogger(__name__)


def _send_sync(to_email: str, subject: str, html: str) -> None:
    msg = MIMEText(html, "html", "utf-8")
    msg["Subject"] = subject
    msg["From"] = f"Movian <{settings.smtp_from or settings.smtp_user}>"
    msg["To"] = to_email

    server = smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=30)
    try:
        if settings.smtp_tls:
            server.starttls()
        server.login(settings.smtp_user, settings.smtp_password)
        server.sendmail(settings.smtp_from or settings.smtp_user, [to_email], msg.as_string())
    finally:
        server.quit()


async def send_email(to_email: str, subject: str, html: str) -> Optional[bool]:
    """
    Send an HTML e-mail.

    Delivery problems are logged and reported as False rather than raised,
    so a mail outage never fails the request that triggered it.

    Returns:
        True on success, False on failure, None when mail is not configured
    """
    if not settings.smtp_user or not settings.smtp_password:
        logger.warning(f"SMTP credentials not configured, skipping mail to {to_email}")
        return None

    try:
        await run_in_threadpool(_send_sync, to_email, subject, html)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send mail to {to_email}: {e}")
        return False

    logger.info(f"Sent '{subject}' to {to_email}")
    return True


async def send_verification_email(to_email: str, token: str) -> Optional[bool]:
    link = f"{settings.client_url}/verify-email/{token}"
    html = (
        "<h2>Welcome to Movian</h2>"
        "<p>Click below to verify your email.</p>"
        f'<a href="{link}">Verify Email</a>'
    )
    return await send_email(to_email, "Verify Your Email - Movian", html)


async def send_password_reset_email(to_email: str, token: str) -> Optional[bool]:
    link = f"{settings.client_url}/reset-password/{token}"
    html = (
        "<h2>Reset Password</h2>"
        f'<a href="{link}">Click to reset</a>'
    )
    return await send_email(to_email, "Reset Your Movian Password", html)
