"""API v1 routes."""

from fastapi import APIRouter

from bgcatalog.api.v1 import accounts, auth, boardgames, categories, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
# Login is registered ahead of /accounts so its path is matched first.
router.include_router(auth.router, prefix="/accounts/login", tags=["auth"])
router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
router.include_router(boardgames.router, prefix="/boardgames", tags=["boardgames"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
