"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...container import AppContainer
from ..dependencies import get_container

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/engine", status_code=status.HTTP_200_OK)
def health_engine(container: AppContainer = Depends(get_container)) -> dict:
    """Collection sizes plus the coarse sync and position states."""
    return {
        "clients": len(container.store),
        "tours": len(container.store.tours()),
        "sync": container.sync.status.value,
        "sync_configured": container.sync.configured,
        "position": container.position.status(),
        "geocoder_configured": container.geocoder is not None,
    }
