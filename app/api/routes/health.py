"""
Liveness and readiness probes.
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter

from app.api.deps import SessionDep
from app.config import settings
from app.db.database import ping_database

router = APIRouter()

STARTED_AT = time.monotonic()


def database_status(ok: bool) -> str:
    return "ready" if ok else "unavailable"


@router.get("/")
async def health_check(session: SessionDep):
    """Report uptime and which integrations are configured, never their values."""
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - STARTED_AT, 3),
        "database": database_status(await ping_database(session)),
        "env": {
            "JWT_SECRET_KEY": bool(settings.jwt_secret_key),
            "CLIENT_URL": bool(settings.client_url),
            "OMDB_API_KEY": bool(settings.omdb_api_key),
            "YOUTUBE_API_KEY": bool(settings.youtube_api_key),
            "SMTP_USER": bool(settings.smtp_user),
            "ADMIN_EMAIL": bool(settings.admin_email),
        },
    }


@router.get("/ready")
async def readiness_check(session: SessionDep):
    """Ready only when the database answers."""
    checks = {
        "api": "ready",
        "database": database_status(await ping_database(session)),
    }
    all_ready = all(v == "ready" for v in checks.values())

    return {
        "status": "ready" if all_ready else "not_ready",
        "checks": checks,
    }
