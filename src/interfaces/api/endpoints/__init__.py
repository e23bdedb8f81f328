from fastapi import APIRouter

from .authors import router as authors_router
from .books import router as books_router
from .users import router as users_router

router = APIRouter()
router.include_router(authors_router)
router.include_router(books_router)
router.include_router(users_router)


@router.get(
    "/health",
    summary="API Health Check",
    description="Simple health check endpoint for monitoring and container orchestration.",
    responses={
        200: {"description": "API is healthy and responding"},
    },
)
async def health_check():
    """Health check endpoint for Docker health checks."""
    return {"status": "healthy", "message": "Bookstore API is running"}
