from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hotelsite.db.models import SITE_SETTINGS_ROW_ID, SiteSetting
from hotelsite.theme import ThemeId, is_valid_theme, resolve_theme

logger = logging.getLogger(__name__)


class SiteSettingsServiceError(ValueError):
    """Raised for expected site-settings validation failures."""


def parse_site_theme(value: object) -> ThemeId:
    if not is_valid_theme(value):
        raise SiteSettingsServiceError("Invalid theme value.")
    return ThemeId(value)


async def _select_site_settings(db_session: AsyncSession) -> SiteSetting | None:
    result = await db_session.execute(
        select(SiteSetting).where(SiteSetting.id == SITE_SETTINGS_ROW_ID)
    )
    return result.scalar_one_or_none()


async def get_or_create_site_settings(
    db_session: AsyncSession,
    *,
    default_theme: str,
) -> SiteSetting:
    site_settings = await _select_site_settings(db_session)
    if site_settings is not None:
        return site_settings

    site_settings = SiteSetting(
        id=SITE_SETTINGS_ROW_ID,
        theme=resolve_theme(default_theme).value,
    )
    db_session.add(site_settings)
    try:
        await db_session.commit()
    except IntegrityError:
        # Another request inserted the singleton row first.
        await db_session.rollback()
        existing = await _select_site_settings(db_session)
        if existing is None:
            raise
        logger.info(
            "site_settings.concurrent_create",
            extra={"event": "site_settings.concurrent_create", "theme": existing.theme},
        )
        return existing
    await db_session.refresh(site_settings)
    return site_settings


async def update_site_theme(
    db_session: AsyncSession,
    *,
    site_settings: SiteSetting,
    theme: ThemeId,
) -> SiteSetting:
    site_settings.theme = theme.value
    await db_session.commit()
    await db_session.refresh(site_settings)
    return site_settings


def effective_site_theme(site_settings: SiteSetting) -> ThemeId:
    return resolve_theme(site_settings.theme)
