from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from hotelsite.presentation.notifications import LoggingNotifier, Notification, Notifier
from hotelsite.presentation.preferences import PREFERRED_THEME_KEY, PreferenceStore
from hotelsite.services.site_theme_client import SiteThemeError
from hotelsite.theme import (
    DEFAULT_THEME,
    THEMES,
    ThemeDefinition,
    ThemeId,
    get_theme_definition,
    is_valid_theme,
)
from hotelsite.theme_styles import ThemeStyles, resolve_styles

logger = logging.getLogger(__name__)

SnapshotListener = Callable[["ThemeSnapshot"], None]


class ProviderState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True)
class ThemeSnapshot:
    """Everything derived from one theme, swapped in as a single value."""

    theme: ThemeId
    styles: ThemeStyles
    definition: ThemeDefinition

    @property
    def body_class(self) -> str:
        return self.definition.body_class

    @property
    def accent_color(self) -> str:
        return self.definition.accent_color

    @property
    def is_dark(self) -> bool:
        return self.definition.is_dark


def build_snapshot(theme: ThemeId) -> ThemeSnapshot:
    return ThemeSnapshot(
        theme=theme,
        styles=resolve_styles(theme),
        definition=get_theme_definition(theme),
    )


class SiteThemeSource(Protocol):
    async def fetch_site_theme(self) -> ThemeId: ...

    async def update_site_theme(self, theme: ThemeId) -> ThemeId: ...

    def invalidate(self) -> None: ...


class ThemeProviderMissingError(RuntimeError):
    """Raised when a theme accessor runs without an active provider."""


_active_provider: ContextVar["ThemeProvider | None"] = ContextVar(
    "active_theme_provider",
    default=None,
)


class ThemeProvider:
    """Resolves and propagates the effective theme for one client.

    The effective theme is the stored local preference when present and
    valid, else the site-wide theme once loaded, else ``DEFAULT_THEME``.
    Local writes apply synchronously; a site-theme response is only applied
    when no local write happened after its request was issued.
    """

    def __init__(
        self,
        *,
        site_theme_source: SiteThemeSource,
        preference_store: PreferenceStore,
        notifier: Notifier | None = None,
        rollback_on_global_failure: bool = False,
    ) -> None:
        self._source = site_theme_source
        self._store = preference_store
        self._notifier = notifier or LoggingNotifier()
        self._rollback_on_global_failure = rollback_on_global_failure
        self._state = ProviderState.UNINITIALIZED
        self._snapshot = build_snapshot(DEFAULT_THEME)
        self._site_theme: ThemeId | None = None
        self._fetch_task: asyncio.Task[ThemeId] | None = None
        self._fetch_seq = 0
        self._revision = 0
        self._listeners: list[SnapshotListener] = []
        self._unsubscribe_store: Callable[[], None] | None = None

    @property
    def state(self) -> ProviderState:
        return self._state

    @property
    def snapshot(self) -> ThemeSnapshot:
        return self._snapshot

    @property
    def current_theme(self) -> ThemeId:
        return self._snapshot.theme

    @property
    def theme_classes(self) -> ThemeStyles:
        return self._snapshot.styles

    @property
    def available_themes(self) -> tuple[ThemeDefinition, ...]:
        return THEMES

    @property
    def site_theme(self) -> ThemeId | None:
        return self._site_theme

    @property
    def is_loading(self) -> bool:
        return self._fetch_task is not None and not self._fetch_task.done()

    def theme_class(self, component: str) -> str:
        return self._snapshot.styles[component]

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> asyncio.Task[ThemeId]:
        if self._state is not ProviderState.UNINITIALIZED:
            return self.refresh_site_theme()

        self._state = ProviderState.LOADING
        self._unsubscribe_store = self._store.subscribe(self._on_preference_changed)
        fetch_task = self.refresh_site_theme()

        saved_theme = self._local_preference()
        if saved_theme is not None:
            self._apply_local(saved_theme)
            self._state = ProviderState.READY
        return fetch_task

    async def wait_ready(self) -> ThemeSnapshot:
        if self._fetch_task is not None:
            await self._fetch_task
        return self._snapshot

    def refresh_site_theme(self) -> asyncio.Task[ThemeId]:
        if self._fetch_task is not None and not self._fetch_task.done():
            return self._fetch_task
        return self._start_fetch()

    def reload_preferences(self) -> None:
        """Pick up preference writes made outside this process."""
        self._store.reload()

    def set_theme(self, candidate: object) -> bool:
        if not is_valid_theme(candidate):
            self._log_rejected("set_theme", candidate)
            return False
        theme = ThemeId(candidate)
        self._apply_local(theme)
        try:
            self._store.set(PREFERRED_THEME_KEY, theme.value)
        except OSError as exc:
            logger.warning(
                "preferences.write_failed",
                extra={
                    "event": "preferences.write_failed",
                    "theme": theme.value,
                    "error": str(exc),
                },
            )
        return True

    def set_global_theme(self, candidate: object) -> asyncio.Task[bool] | None:
        if not is_valid_theme(candidate):
            self._log_rejected("set_global_theme", candidate)
            return None
        theme = ThemeId(candidate)
        previous = self._snapshot.theme
        self._apply_local(theme)
        return asyncio.get_running_loop().create_task(
            self._write_global_theme(theme, previous=previous, revision=self._revision)
        )

    def close(self) -> None:
        if self._unsubscribe_store is not None:
            self._unsubscribe_store()
            self._unsubscribe_store = None
        self._listeners.clear()

    @contextmanager
    def activate(self) -> Iterator["ThemeProvider"]:
        token = _active_provider.set(self)
        try:
            yield self
        finally:
            _active_provider.reset(token)

    def _start_fetch(self) -> asyncio.Task[ThemeId]:
        self._fetch_seq += 1
        self._fetch_task = asyncio.get_running_loop().create_task(
            self._load_site_theme(self._revision, self._fetch_seq)
        )
        return self._fetch_task

    async def _load_site_theme(self, issued_revision: int, fetch_seq: int) -> ThemeId:
        try:
            theme = await self._source.fetch_site_theme()
        except SiteThemeError as exc:
            logger.warning(
                "theme_provider.site_theme_fetch_failed",
                extra={
                    "event": "theme_provider.site_theme_fetch_failed",
                    "error": str(exc),
                    "fallback_theme": DEFAULT_THEME.value,
                },
            )
            theme = DEFAULT_THEME

        if fetch_seq != self._fetch_seq:
            return theme
        self._site_theme = theme
        if issued_revision == self._revision and self._local_preference() is None:
            self._apply(theme)
        self._state = ProviderState.READY
        return theme

    async def _write_global_theme(
        self,
        theme: ThemeId,
        *,
        previous: ThemeId,
        revision: int,
    ) -> bool:
        try:
            await self._source.update_site_theme(theme)
        except SiteThemeError as exc:
            logger.warning(
                "theme_provider.site_theme_update_failed",
                extra={
                    "event": "theme_provider.site_theme_update_failed",
                    "theme": theme.value,
                    "error": str(exc),
                },
            )
            self._notifier.notify(
                Notification(
                    title="Theme could not be changed",
                    description=str(exc),
                    variant="destructive",
                )
            )
            if self._rollback_on_global_failure and revision == self._revision:
                self._apply_local(previous)
            return False

        self._source.invalidate()
        logger.info(
            "theme_provider.site_theme_updated",
            extra={"event": "theme_provider.site_theme_updated", "theme": theme.value},
        )
        self._notifier.notify(
            Notification(
                title="Site theme changed",
                description="The default theme was updated for all visitors.",
            )
        )
        # A read still in flight was issued before the write and cannot see it.
        issued_before_write = self._fetch_task
        if issued_before_write is not None and not issued_before_write.done():
            await issued_before_write
        if self._fetch_task is issued_before_write:
            await self._start_fetch()
        else:
            await self.refresh_site_theme()
        return True

    def _on_preference_changed(self, key: str, value: str | None) -> None:
        if key != PREFERRED_THEME_KEY:
            return
        if value is None:
            self._apply_local(self._site_theme or DEFAULT_THEME)
            return
        if not is_valid_theme(value):
            self._log_rejected("preference_changed", value)
            return
        self._apply_local(ThemeId(value))

    def _local_preference(self) -> ThemeId | None:
        saved = self._store.get(PREFERRED_THEME_KEY)
        if is_valid_theme(saved):
            return ThemeId(saved)
        return None

    def _apply_local(self, theme: ThemeId) -> None:
        self._revision += 1
        self._apply(theme)

    def _apply(self, theme: ThemeId) -> None:
        if theme is self._snapshot.theme:
            return
        snapshot = build_snapshot(theme)
        self._snapshot = snapshot
        logger.debug(
            "theme_provider.theme_applied",
            extra={"event": "theme_provider.theme_applied", "theme": theme.value},
        )
        for listener in list(self._listeners):
            listener(snapshot)

    def _log_rejected(self, operation: str, candidate: object) -> None:
        logger.warning(
            "theme_provider.invalid_theme",
            extra={
                "event": "theme_provider.invalid_theme",
                "operation": operation,
                "candidate": repr(candidate),
            },
        )


def use_theme() -> ThemeProvider:
    provider = _active_provider.get()
    if provider is None:
        raise ThemeProviderMissingError("use_theme must be used within a ThemeProvider")
    return provider


def use_current_theme() -> ThemeId:
    return use_theme().current_theme


def use_theme_class(component: str) -> str:
    return use_theme().theme_class(component)


def use_set_theme() -> Callable[[object], bool]:
    return use_theme().set_theme


def use_set_global_theme() -> Callable[[object], "asyncio.Task[bool] | None"]:
    return use_theme().set_global_theme
