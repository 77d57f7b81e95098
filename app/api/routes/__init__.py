"""
API router aggregating all route modules.
"""

from fastapi import APIRouter

from app.api.routes import health, auth, admin, watchlist, comments, movies

router = APIRouter()

# Include all route modules
router.include_router(health.router, prefix="/health", tags=["Health"])
router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(admin.router, prefix="/admin", tags=["Admin"])
router.include_router(watchlist.router, prefix="/mylist", tags=["My List"])
router.include_router(comments.router, prefix="/comments", tags=["Comments"])
router.include_router(movies.router, prefix="/movies", tags=["Movies"])
