from __future__ import annotations

from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from hotelsite.settings import settings

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def build_template_context(
    request: Request,
    *,
    page_title: str,
    theme_name: str,
    notice: str | None = None,
    page_error: str | None = None,
) -> dict[str, object]:
    return {
        "app_name": settings.app_name,
        "page_title": page_title,
        "theme_name": theme_name,
        "request_id": getattr(request.state, "request_id", None),
        "notice": notice,
        "page_error": page_error,
    }
