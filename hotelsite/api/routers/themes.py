from __future__ import annotations

from fastapi import APIRouter, Request

from hotelsite.api.responses import success_payload
from hotelsite.api.schemas import ThemesListEnvelope
from hotelsite.settings import settings as settings_module
from hotelsite.theme import THEMES, ThemeDefinition, resolve_theme

router = APIRouter(prefix="/themes", tags=["api-themes"])


def _serialize_theme(theme: ThemeDefinition) -> dict[str, object]:
    return {
        "slug": theme.slug.value,
        "label": theme.label,
        "description": theme.description,
        "icon": theme.icon,
        "thumbnail": theme.thumbnail,
        "accent_color": theme.accent_color,
        "color_scheme": theme.color_scheme,
        "body_class": theme.body_class,
    }


@router.get(
    "",
    response_model=ThemesListEnvelope,
)
async def list_themes(request: Request):
    return success_payload(
        request,
        data={
            "themes": [_serialize_theme(theme) for theme in THEMES],
            "default_theme": resolve_theme(settings_module.default_site_theme).value,
        },
    )
