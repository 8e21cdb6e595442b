"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_optimizer_health_check():
    """Lazy import to avoid startup failures."""
    from ...services.transport.client import check_health as optimizer_health_check
    return optimizer_health_check


@router.get("/health/optimizer", status_code=status.HTTP_200_OK)
async def health_optimizer() -> dict:
    """Check that the remote optimization service answers."""
    optimizer_health_check = _get_optimizer_health_check()
    return {"service": "optimizer", "healthy": await optimizer_health_check()}
