"""API routers, mounted under /api by fintrack.main"""
from fastapi import APIRouter

from fintrack.api.routes import asset_groups, asset_items, asset_projection, asset_valuations

router = APIRouter()
router.include_router(asset_groups.router, prefix="/asset-groups", tags=["asset-groups"])
router.include_router(asset_items.router, prefix="/asset-items", tags=["asset-items"])
router.include_router(asset_valuations.router, prefix="/asset-valuations", tags=["asset-valuations"])
router.include_router(asset_projection.router, prefix="/asset-projection", tags=["asset-projection"])

__all__ = ["router"]
