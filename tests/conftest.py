from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from dataclasses import replace
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from hotelsite.api import deps
from hotelsite.db.session import get_db_session
from hotelsite.main import app
from hotelsite.services import page_contents as page_content_service
from hotelsite.services import site_settings as site_settings_service
from hotelsite.theme import ThemeId

ADMIN_TOKEN = "secret"


class InMemorySiteSettings:
    """Stands in for the site_settings row so web tests run without Postgres."""

    def __init__(self, theme: str = "classic") -> None:
        self.row = SimpleNamespace(
            theme=theme,
            updated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        self.updates: list[ThemeId] = []

    async def get_or_create(self, db_session, *, default_theme: str) -> SimpleNamespace:
        return self.row

    async def update(self, db_session, *, site_settings, theme: ThemeId) -> SimpleNamespace:
        site_settings.theme = theme.value
        self.updates.append(theme)
        return site_settings


async def _no_db_session() -> AsyncIterator[None]:
    yield None


@pytest.fixture
def site_settings_store(monkeypatch) -> Iterator[InMemorySiteSettings]:
    store = InMemorySiteSettings()
    monkeypatch.setattr(
        site_settings_service,
        "get_or_create_site_settings",
        store.get_or_create,
    )
    monkeypatch.setattr(site_settings_service, "update_site_theme", store.update)
    monkeypatch.setattr(deps, "settings", replace(deps.settings, admin_api_token=ADMIN_TOKEN))
    app.dependency_overrides[get_db_session] = _no_db_session
    yield store
    app.dependency_overrides.pop(get_db_session, None)


class InMemoryPageContents:
    """Keeps page_contents rows in a dict keyed by page key."""

    def __init__(self) -> None:
        self.rows: dict[str, SimpleNamespace] = {}
        self._next_id = 1

    def seed(self, page_key: str, *, title: str, content: str) -> SimpleNamespace:
        stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
        row = SimpleNamespace(
            id=self._next_id,
            page_key=page_key,
            title=title,
            content=content,
            created_at=stamp,
            updated_at=stamp,
        )
        self._next_id += 1
        self.rows[page_key] = row
        return row

    async def list_all(self, db_session) -> list[SimpleNamespace]:
        return [self.rows[key] for key in sorted(self.rows)]

    async def get(self, db_session, *, page_key: str) -> SimpleNamespace | None:
        return self.rows.get(page_key.strip())

    async def create(self, db_session, *, page_key: str, title: str, content: str):
        page_key = page_content_service.validate_page_key(page_key)
        title = page_content_service.validate_title(title)
        if page_key in self.rows:
            raise page_content_service.PageContentConflictError(
                "Page content with this key already exists."
            )
        return self.seed(page_key, title=title, content=content)

    async def update(self, db_session, *, page_content, title=None, content=None):
        if title is not None:
            page_content.title = page_content_service.validate_title(title)
        if content is not None:
            page_content.content = content
        page_content.updated_at = datetime(2024, 6, 1, tzinfo=timezone.utc)
        return page_content

    async def delete(self, db_session, *, page_content) -> None:
        del self.rows[page_content.page_key]


@pytest.fixture
def page_content_store(monkeypatch) -> Iterator[InMemoryPageContents]:
    store = InMemoryPageContents()
    monkeypatch.setattr(page_content_service, "list_page_contents", store.list_all)
    monkeypatch.setattr(page_content_service, "get_page_content", store.get)
    monkeypatch.setattr(page_content_service, "create_page_content", store.create)
    monkeypatch.setattr(page_content_service, "update_page_content", store.update)
    monkeypatch.setattr(page_content_service, "delete_page_content", store.delete)
    monkeypatch.setattr(deps, "settings", replace(deps.settings, admin_api_token=ADMIN_TOKEN))
    app.dependency_overrides[get_db_session] = _no_db_session
    yield store
    app.dependency_overrides.pop(get_db_session, None)
