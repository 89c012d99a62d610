from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hotelsite.api.deps import require_api_admin
from hotelsite.api.errors import ApiException
from hotelsite.api.responses import success_payload
from hotelsite.api.schemas import SiteThemeEnvelope, SiteThemeUpdateRequest
from hotelsite.db.session import get_db_session
from hotelsite.services import site_settings as site_settings_service
from hotelsite.settings import settings as settings_module

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/site-settings", tags=["api-site-settings"])


def _serialize_site_theme(site_settings) -> dict[str, object]:
    return {
        "theme": site_settings_service.effective_site_theme(site_settings).value,
        "updated_at": site_settings.updated_at,
    }


@router.get(
    "/theme",
    response_model=SiteThemeEnvelope,
)
async def get_site_theme(
    request: Request,
    db_session: AsyncSession = Depends(get_db_session),
):
    site_settings = await site_settings_service.get_or_create_site_settings(
        db_session,
        default_theme=settings_module.default_site_theme,
    )
    return success_payload(
        request,
        data=_serialize_site_theme(site_settings),
    )


@router.post(
    "/theme",
    response_model=SiteThemeEnvelope,
    dependencies=[Depends(require_api_admin)],
)
async def update_site_theme(
    payload: SiteThemeUpdateRequest,
    request: Request,
    db_session: AsyncSession = Depends(get_db_session),
):
    try:
        theme = site_settings_service.parse_site_theme(payload.theme)
    except site_settings_service.SiteSettingsServiceError as exc:
        raise ApiException(
            status_code=400,
            code="invalid_theme",
            message=str(exc),
        ) from exc

    site_settings = await site_settings_service.get_or_create_site_settings(
        db_session,
        default_theme=settings_module.default_site_theme,
    )
    previous_theme = site_settings.theme
    updated = await site_settings_service.update_site_theme(
        db_session,
        site_settings=site_settings,
        theme=theme,
    )
    logger.info(
        "api.site_settings.theme_updated",
        extra={
            "event": "api.site_settings.theme_updated",
            "previous_theme": previous_theme,
            "theme": updated.theme,
        },
    )
    return success_payload(
        request,
        data=_serialize_site_theme(updated),
    )
