from __future__ import annotations

from hotelsite.presentation.notifications import Notifier
from hotelsite.presentation.preferences import JsonFilePreferenceStore
from hotelsite.presentation.theme_provider import ThemeProvider
from hotelsite.services.site_theme_client import SiteThemeClient
from hotelsite.settings import Settings


def create_theme_provider(
    settings: Settings,
    *,
    notifier: Notifier | None = None,
    rollback_on_global_failure: bool = False,
) -> ThemeProvider:
    client = SiteThemeClient(
        base_url=settings.site_theme_api_url,
        admin_token=settings.admin_api_token,
        timeout_seconds=settings.site_theme_timeout_seconds,
    )
    return ThemeProvider(
        site_theme_source=client,
        preference_store=JsonFilePreferenceStore(settings.preference_store_path),
        notifier=notifier,
        rollback_on_global_failure=rollback_on_global_failure,
    )
