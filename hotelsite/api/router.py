from __future__ import annotations

from fastapi import APIRouter

from hotelsite.api.routers import locations, page_contents, site_settings, themes

router = APIRouter(prefix="/api/v1")
router.include_router(site_settings.router)
router.include_router(themes.router)
router.include_router(locations.router)
router.include_router(page_contents.router)
