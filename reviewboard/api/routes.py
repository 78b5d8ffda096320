"""Root API router."""

from fastapi import APIRouter

from reviewboard.api.endpoints import issues, reviews

router = APIRouter()


@router.get("/health", tags=["health"])
def health_check() -> dict:
    """Simple health check endpoint."""
    return {"status": "ok"}


router.include_router(reviews.router)
router.include_router(issues.router)
