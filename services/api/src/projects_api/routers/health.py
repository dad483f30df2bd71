"""Health check router."""

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Liveness check; does not touch the database or providers."""
    return {"status": "ok", "service": "projects-api"}
