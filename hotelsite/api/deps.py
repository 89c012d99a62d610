from __future__ import annotations

import logging
from secrets import compare_digest

from fastapi import Request

from hotelsite.api.errors import ApiException
from hotelsite.services.site_theme_client import ADMIN_TOKEN_HEADER
from hotelsite.settings import settings

logger = logging.getLogger(__name__)


async def require_api_admin(request: Request) -> None:
    expected = settings.admin_api_token
    provided = request.headers.get(ADMIN_TOKEN_HEADER, "")
    if not expected or not provided or not compare_digest(provided, expected):
        logger.info(
            "api.admin_denied",
            extra={
                "event": "api.admin_denied",
                "path": request.url.path,
                "token_configured": bool(expected),
            },
        )
        raise ApiException(
            status_code=403,
            code="forbidden",
            message="Admin access required.",
        )
