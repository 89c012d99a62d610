from __future__ import annotations

import logging

import httpx

from hotelsite.theme import ThemeId, resolve_theme

SITE_THEME_PATH = "/api/v1/site-settings/theme"
ADMIN_TOKEN_HEADER = "X-Admin-Token"

logger = logging.getLogger(__name__)


class SiteThemeError(RuntimeError):
    """Raised when the site-wide theme cannot be read or written."""


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
    return f"Site theme request failed with status {response.status_code}."


def _theme_from_payload(payload: object) -> ThemeId:
    data = payload.get("data") if isinstance(payload, dict) else None
    theme = data.get("theme") if isinstance(data, dict) else None
    if theme is None:
        raise SiteThemeError("Site theme response did not include a theme.")
    return resolve_theme(theme)


class SiteThemeClient:
    """HTTP access to the site-wide theme with a cached read."""

    def __init__(
        self,
        *,
        base_url: str,
        admin_token: str | None = None,
        timeout_seconds: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._admin_token = admin_token or None
        self._timeout_seconds = timeout_seconds
        self._transport = transport
        self._cached: ThemeId | None = None
        self._generation = 0

    def invalidate(self) -> None:
        self._cached = None
        self._generation += 1

    async def fetch_site_theme(self) -> ThemeId:
        if self._cached is not None:
            return self._cached
        generation = self._generation
        payload = await self._request("GET", SITE_THEME_PATH)
        theme = _theme_from_payload(payload)
        # Reads issued before the last invalidate() are returned but never cached.
        if generation == self._generation:
            self._cached = theme
        return theme

    async def update_site_theme(self, theme: ThemeId) -> ThemeId:
        headers = {}
        if self._admin_token:
            headers[ADMIN_TOKEN_HEADER] = self._admin_token
        payload = await self._request(
            "POST",
            SITE_THEME_PATH,
            json={"theme": theme.value},
            headers=headers,
        )
        return _theme_from_payload(payload)

    async def _request(self, method: str, path: str, **kwargs) -> object:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout_seconds,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(method, path, **kwargs)
            except httpx.HTTPError as exc:
                logger.warning(
                    "site_theme_client.transport_error",
                    extra={
                        "event": "site_theme_client.transport_error",
                        "method": method,
                        "path": path,
                        "error": str(exc),
                    },
                )
                raise SiteThemeError(f"Site theme service unreachable: {exc}") from exc

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning(
                "site_theme_client.request_failed",
                extra={
                    "event": "site_theme_client.request_failed",
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                },
            )
            raise SiteThemeError(message)
        try:
            return response.json()
        except ValueError as exc:
            raise SiteThemeError("Site theme response was not valid JSON.") from exc
