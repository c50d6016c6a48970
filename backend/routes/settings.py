"""Health check and asset settings endpoints."""

from fastapi import APIRouter

from backend import assets

router = APIRouter()


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.get("/settings")
async def get_settings():
    """Where the embedded story (and optional bookmark) were loaded from."""
    return assets.asset_paths()
