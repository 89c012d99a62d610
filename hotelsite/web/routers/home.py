from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hotelsite.db.session import get_db_session
from hotelsite.presentation.search_page import build_search_page_view_model
from hotelsite.services import site_settings as site_settings_service
from hotelsite.settings import settings
from hotelsite.theme import ThemeId, is_valid_theme
from hotelsite.web import common

logger = logging.getLogger(__name__)

router = APIRouter()


async def _resolve_page_theme(
    db_session: AsyncSession,
    requested_theme: str | None,
) -> ThemeId:
    if is_valid_theme(requested_theme):
        return ThemeId(requested_theme)
    site_settings = await site_settings_service.get_or_create_site_settings(
        db_session,
        default_theme=settings.default_site_theme,
    )
    return site_settings_service.effective_site_theme(site_settings)


@router.get("/", response_class=HTMLResponse)
async def search_page(
    request: Request,
    theme: str | None = None,
    city: str | None = None,
    district: str | None = None,
    db_session: AsyncSession = Depends(get_db_session),
) -> HTMLResponse:
    active_theme = await _resolve_page_theme(db_session, theme)
    view_model = build_search_page_view_model(
        theme=active_theme,
        city=city,
        district=district,
    )
    context = common.build_template_context(
        request,
        page_title="Find a hotel",
        theme_name=active_theme.value,
        notice=request.query_params.get("notice"),
        page_error=request.query_params.get("error"),
    )
    context["vm"] = view_model
    return common.templates.TemplateResponse(
        request=request,
        name="search.html",
        context=context,
    )
