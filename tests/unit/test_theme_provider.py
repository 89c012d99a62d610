from __future__ import annotations

import asyncio
import json
from pathlib import Path

import httpx
import pytest

from hotelsite.presentation.notifications import Notification
from hotelsite.presentation.preferences import (
    PREFERRED_THEME_KEY,
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
)
from hotelsite.presentation.theme_provider import (
    ProviderState,
    ThemeProvider,
    ThemeProviderMissingError,
    ThemeSnapshot,
    use_current_theme,
    use_set_theme,
    use_theme,
    use_theme_class,
)
from hotelsite.services.site_theme_client import SiteThemeClient, SiteThemeError
from hotelsite.theme import ThemeId
from hotelsite.theme_styles import resolve_styles


class FakeSiteThemeSource:
    def __init__(
        self,
        theme: ThemeId = ThemeId.CLASSIC,
        *,
        fetch_error: str | None = None,
        update_error: str | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.theme = theme
        self.fetch_error = fetch_error
        self.update_error = update_error
        self.gate = gate
        self.fetch_calls = 0
        self.update_calls: list[ThemeId] = []
        self.invalidations = 0

    async def fetch_site_theme(self) -> ThemeId:
        self.fetch_calls += 1
        theme = self.theme
        if self.gate is not None:
            await self.gate.wait()
        if self.fetch_error:
            raise SiteThemeError(self.fetch_error)
        return theme

    async def update_site_theme(self, theme: ThemeId) -> ThemeId:
        self.update_calls.append(theme)
        if self.update_error:
            raise SiteThemeError(self.update_error)
        self.theme = theme
        return theme

    def invalidate(self) -> None:
        self.invalidations += 1


class RecordingNotifier:
    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)


def _provider(
    source: FakeSiteThemeSource,
    store: InMemoryPreferenceStore | None = None,
    **kwargs,
) -> tuple[ThemeProvider, InMemoryPreferenceStore, RecordingNotifier]:
    store = store if store is not None else InMemoryPreferenceStore()
    notifier = RecordingNotifier()
    provider = ThemeProvider(
        site_theme_source=source,
        preference_store=store,
        notifier=notifier,
        **kwargs,
    )
    return provider, store, notifier


def test_provider_starts_uninitialized_with_default_snapshot() -> None:
    provider, _, _ = _provider(FakeSiteThemeSource())

    assert provider.state is ProviderState.UNINITIALIZED
    assert provider.current_theme is ThemeId.CLASSIC
    assert provider.theme_classes == resolve_styles(ThemeId.CLASSIC)
    assert provider.is_loading is False


@pytest.mark.asyncio
async def test_site_theme_applies_after_load_when_no_local_preference() -> None:
    gate = asyncio.Event()
    source = FakeSiteThemeSource(ThemeId.MODERN, gate=gate)
    provider, _, _ = _provider(source)

    provider.start()
    await asyncio.sleep(0)

    assert provider.state is ProviderState.LOADING
    assert provider.is_loading is True
    assert provider.current_theme is ThemeId.CLASSIC
    assert provider.theme_classes == resolve_styles(ThemeId.CLASSIC)

    gate.set()
    snapshot = await provider.wait_ready()

    assert provider.state is ProviderState.READY
    assert provider.is_loading is False
    assert snapshot.theme is ThemeId.MODERN
    assert provider.current_theme is ThemeId.MODERN
    assert provider.site_theme is ThemeId.MODERN
    assert provider.theme_classes == resolve_styles(ThemeId.MODERN)


@pytest.mark.asyncio
async def test_local_preference_takes_precedence_over_site_theme() -> None:
    store = InMemoryPreferenceStore({PREFERRED_THEME_KEY: "luxury"})
    provider, _, _ = _provider(FakeSiteThemeSource(ThemeId.COASTAL), store)

    provider.start()

    assert provider.current_theme is ThemeId.LUXURY
    assert provider.state is ProviderState.READY

    await provider.wait_ready()

    assert provider.current_theme is ThemeId.LUXURY
    assert provider.site_theme is ThemeId.COASTAL


@pytest.mark.asyncio
async def test_invalid_stored_preference_is_ignored() -> None:
    store = InMemoryPreferenceStore({PREFERRED_THEME_KEY: "neon"})
    provider, _, _ = _provider(FakeSiteThemeSource(ThemeId.BOUTIQUE), store)

    provider.start()
    await provider.wait_ready()

    assert provider.current_theme is ThemeId.BOUTIQUE


@pytest.mark.asyncio
async def test_failed_site_theme_fetch_falls_back_to_default() -> None:
    source = FakeSiteThemeSource(ThemeId.MODERN, fetch_error="service down")
    provider, _, notifier = _provider(source)

    provider.start()
    await provider.wait_ready()

    assert provider.state is ProviderState.READY
    assert provider.current_theme is ThemeId.CLASSIC
    assert provider.site_theme is ThemeId.CLASSIC
    assert notifier.notifications == []


@pytest.mark.asyncio
async def test_only_one_site_theme_fetch_is_in_flight() -> None:
    gate = asyncio.Event()
    source = FakeSiteThemeSource(ThemeId.MODERN, gate=gate)
    provider, _, _ = _provider(source)

    first = provider.start()
    second = provider.refresh_site_theme()
    await asyncio.sleep(0)

    assert first is second
    assert source.fetch_calls == 1

    gate.set()
    await first


def test_set_theme_updates_preference_without_network() -> None:
    source = FakeSiteThemeSource()
    provider, store, _ = _provider(source)

    assert provider.set_theme("boutique") is True

    assert provider.current_theme is ThemeId.BOUTIQUE
    assert provider.theme_classes == resolve_styles(ThemeId.BOUTIQUE)
    assert store.get(PREFERRED_THEME_KEY) == "boutique"
    assert source.fetch_calls == 0
    assert source.update_calls == []


def test_set_theme_rejects_unknown_theme() -> None:
    provider, store, _ = _provider(FakeSiteThemeSource())
    provider.set_theme("coastal")

    assert provider.set_theme("neon") is False
    assert provider.set_theme(None) is False

    assert provider.current_theme is ThemeId.COASTAL
    assert store.get(PREFERRED_THEME_KEY) == "coastal"


@pytest.mark.asyncio
async def test_set_theme_during_load_wins_over_late_site_theme() -> None:
    gate = asyncio.Event()
    provider, _, _ = _provider(FakeSiteThemeSource(ThemeId.MODERN, gate=gate))

    provider.start()
    provider.set_theme("luxury")
    gate.set()
    await provider.wait_ready()

    assert provider.current_theme is ThemeId.LUXURY


@pytest.mark.asyncio
async def test_set_global_theme_applies_optimistically_and_persists() -> None:
    source = FakeSiteThemeSource(ThemeId.CLASSIC)
    provider, store, notifier = _provider(source)
    provider.start()
    await provider.wait_ready()

    write = provider.set_global_theme("coastal")

    assert write is not None
    assert provider.current_theme is ThemeId.COASTAL
    assert source.update_calls == []

    assert await write is True
    assert source.update_calls == [ThemeId.COASTAL]
    assert source.invalidations == 1
    assert await source.fetch_site_theme() is ThemeId.COASTAL
    assert provider.site_theme is ThemeId.COASTAL
    assert provider.current_theme is ThemeId.COASTAL
    assert store.get(PREFERRED_THEME_KEY) is None
    assert [n.variant for n in notifier.notifications] == ["default"]
    assert notifier.notifications[0].title == "Site theme changed"


@pytest.mark.asyncio
async def test_set_global_theme_failure_notifies_and_keeps_optimistic_theme() -> None:
    source = FakeSiteThemeSource(ThemeId.MODERN, update_error="Admin access required.")
    provider, _, notifier = _provider(source)
    provider.start()
    await provider.wait_ready()

    write = provider.set_global_theme("luxury")

    assert write is not None
    assert await write is False
    assert provider.current_theme is ThemeId.LUXURY
    assert source.invalidations == 0
    assert len(notifier.notifications) == 1
    assert notifier.notifications[0].variant == "destructive"
    assert notifier.notifications[0].description == "Admin access required."


@pytest.mark.asyncio
async def test_set_global_theme_failure_can_roll_back() -> None:
    source = FakeSiteThemeSource(ThemeId.MODERN, update_error="boom")
    provider, _, _ = _provider(source, rollback_on_global_failure=True)
    provider.start()
    await provider.wait_ready()

    write = provider.set_global_theme("luxury")
    assert write is not None
    await write

    assert provider.current_theme is ThemeId.MODERN


@pytest.mark.asyncio
async def test_set_global_theme_rejects_unknown_theme() -> None:
    source = FakeSiteThemeSource()
    provider, _, notifier = _provider(source)

    assert provider.set_global_theme("neon") is None

    assert provider.current_theme is ThemeId.CLASSIC
    assert source.update_calls == []
    assert notifier.notifications == []


@pytest.mark.asyncio
async def test_global_write_issued_during_load_is_not_overwritten_by_stale_fetch() -> None:
    gate = asyncio.Event()
    source = FakeSiteThemeSource(ThemeId.MODERN, gate=gate)
    provider, _, _ = _provider(source)

    provider.start()
    await asyncio.sleep(0)
    write = provider.set_global_theme("boutique")
    assert write is not None
    await asyncio.sleep(0)
    gate.set()
    assert await write is True

    assert provider.current_theme is ThemeId.BOUTIQUE
    assert provider.site_theme is ThemeId.BOUTIQUE
    assert source.fetch_calls == 2


@pytest.mark.asyncio
async def test_providers_sharing_a_store_converge() -> None:
    store = InMemoryPreferenceStore()
    first, _, _ = _provider(FakeSiteThemeSource(ThemeId.MODERN), store)
    second, _, _ = _provider(FakeSiteThemeSource(ThemeId.MODERN), store)
    first.start()
    second.start()
    await first.wait_ready()
    await second.wait_ready()

    first.set_theme("luxury")

    assert second.current_theme is ThemeId.LUXURY

    store.remove(PREFERRED_THEME_KEY)

    assert first.current_theme is ThemeId.MODERN
    assert second.current_theme is ThemeId.MODERN


@pytest.mark.asyncio
async def test_closed_provider_stops_following_store() -> None:
    store = InMemoryPreferenceStore()
    provider, _, _ = _provider(FakeSiteThemeSource(), store)
    provider.start()
    await provider.wait_ready()
    provider.close()

    store.set(PREFERRED_THEME_KEY, "coastal")

    assert provider.current_theme is ThemeId.CLASSIC


def test_listeners_receive_consistent_snapshots() -> None:
    provider, _, _ = _provider(FakeSiteThemeSource())
    seen: list[ThemeSnapshot] = []
    unsubscribe = provider.subscribe(seen.append)

    provider.set_theme("modern")
    provider.set_theme("modern")
    unsubscribe()
    provider.set_theme("coastal")

    assert [snapshot.theme for snapshot in seen] == [ThemeId.MODERN]
    snapshot = seen[0]
    assert snapshot.styles == resolve_styles(ThemeId.MODERN)
    assert snapshot.body_class == "theme-modern"
    assert snapshot.is_dark is True
    assert snapshot.accent_color == "#0f172a"


def test_theme_accessors_fail_outside_provider() -> None:
    with pytest.raises(ThemeProviderMissingError):
        use_theme()
    with pytest.raises(ThemeProviderMissingError):
        use_theme_class("card")


def test_theme_accessors_read_active_provider() -> None:
    provider, _, _ = _provider(FakeSiteThemeSource())

    with provider.activate():
        assert use_theme() is provider
        use_set_theme()("luxury")
        assert use_current_theme() is ThemeId.LUXURY
        assert use_theme_class("card") == resolve_styles(ThemeId.LUXURY)["card"]
        assert use_theme_class("no-such-component") == ""

    with pytest.raises(ThemeProviderMissingError):
        use_theme()


def _theme_envelope(theme: str) -> dict[str, object]:
    return {"data": {"theme": theme, "updated_at": None}, "meta": {"request_id": None}}


@pytest.mark.asyncio
async def test_global_write_refreshes_client_cache_after_inflight_read() -> None:
    server = {"theme": "modern"}
    first_get_started = asyncio.Event()
    release_first_get = asyncio.Event()
    get_count = 0

    async def handler(request: httpx.Request) -> httpx.Response:
        nonlocal get_count
        if request.method == "POST":
            server["theme"] = json.loads(request.content)["theme"]
            return httpx.Response(200, json=_theme_envelope(server["theme"]))
        get_count += 1
        theme = server["theme"]
        if get_count == 1:
            first_get_started.set()
            await release_first_get.wait()
        return httpx.Response(200, json=_theme_envelope(theme))

    client = SiteThemeClient(
        base_url="http://hotelsite.test",
        admin_token="secret",
        transport=httpx.MockTransport(handler),
    )
    provider, store, _ = _provider(client)

    provider.start()
    await first_get_started.wait()
    write = provider.set_global_theme("boutique")
    assert write is not None
    while server["theme"] != "boutique":
        await asyncio.sleep(0)
    release_first_get.set()

    assert await write is True
    assert provider.site_theme is ThemeId.BOUTIQUE
    assert await client.fetch_site_theme() is ThemeId.BOUTIQUE
    assert get_count == 2

    store.set(PREFERRED_THEME_KEY, "luxury")
    store.remove(PREFERRED_THEME_KEY)

    assert provider.current_theme is ThemeId.BOUTIQUE


class UnwritablePreferenceStore(InMemoryPreferenceStore):
    def _persist(self, values: dict[str, str]) -> None:
        raise PermissionError("read-only preferences")


def test_set_theme_keeps_session_theme_when_preference_cannot_be_saved() -> None:
    store = UnwritablePreferenceStore()
    provider, _, _ = _provider(FakeSiteThemeSource(), store)

    assert provider.set_theme("coastal") is True

    assert provider.current_theme is ThemeId.COASTAL
    assert store.get(PREFERRED_THEME_KEY) is None


@pytest.mark.asyncio
async def test_providers_in_separate_processes_converge_on_reload(tmp_path: Path) -> None:
    path = tmp_path / "preferences.json"
    writer, _, _ = _provider(FakeSiteThemeSource(ThemeId.MODERN), JsonFilePreferenceStore(path))
    reader, _, _ = _provider(FakeSiteThemeSource(ThemeId.MODERN), JsonFilePreferenceStore(path))
    writer.start()
    reader.start()
    await writer.wait_ready()
    await reader.wait_ready()

    writer.set_theme("luxury")

    assert reader.current_theme is ThemeId.MODERN

    reader.reload_preferences()

    assert reader.current_theme is ThemeId.LUXURY
