"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...persistence.base import DonationPointStore
from ..dependencies import get_store

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database(store: DonationPointStore = Depends(get_store)) -> dict:
    """Report which storage backend is in use and whether it answers."""
    connected = store.ping()
    return {
        "backend": store.name,
        "connected": connected,
        "message": f"Storage backend '{store.name}' reachable." if connected else f"Storage backend '{store.name}' did not respond.",
    }
