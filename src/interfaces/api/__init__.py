from fastapi import APIRouter

from ...infrastructure.config.settings import settings
from .endpoints import router as endpoints_router

router = APIRouter(prefix=settings.API_PREFIX)
router.include_router(endpoints_router)

__all__ = ["router"]
