from __future__ import annotations

import re

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hotelsite.db.models import PageContent

PAGE_KEY_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]{0,63}$")
TITLE_MAX_LENGTH = 200


class PageContentServiceError(ValueError):
    """Raised for expected page-content validation failures."""


class PageContentConflictError(PageContentServiceError):
    """Raised when a page key is already taken."""


def validate_page_key(value: str) -> str:
    page_key = value.strip()
    if not PAGE_KEY_PATTERN.fullmatch(page_key):
        raise PageContentServiceError(
            "Page key must be 1-64 lowercase letters, digits, '_' or '-'."
        )
    return page_key


def validate_title(value: str) -> str:
    title = value.strip()
    if not title:
        raise PageContentServiceError("Title is required.")
    if len(title) > TITLE_MAX_LENGTH:
        raise PageContentServiceError(f"Title must be at most {TITLE_MAX_LENGTH} characters.")
    return title


async def list_page_contents(db_session: AsyncSession) -> list[PageContent]:
    result = await db_session.execute(select(PageContent).order_by(PageContent.page_key))
    return list(result.scalars().all())


async def get_page_content(
    db_session: AsyncSession,
    *,
    page_key: str,
) -> PageContent | None:
    result = await db_session.execute(
        select(PageContent).where(PageContent.page_key == page_key.strip())
    )
    return result.scalar_one_or_none()


async def create_page_content(
    db_session: AsyncSession,
    *,
    page_key: str,
    title: str,
    content: str,
) -> PageContent:
    page_key = validate_page_key(page_key)
    title = validate_title(title)
    if await get_page_content(db_session, page_key=page_key) is not None:
        raise PageContentConflictError("Page content with this key already exists.")

    page_content = PageContent(page_key=page_key, title=title, content=content)
    db_session.add(page_content)
    try:
        await db_session.commit()
    except IntegrityError as exc:
        await db_session.rollback()
        raise PageContentConflictError("Page content with this key already exists.") from exc
    await db_session.refresh(page_content)
    return page_content


async def update_page_content(
    db_session: AsyncSession,
    *,
    page_content: PageContent,
    title: str | None = None,
    content: str | None = None,
) -> PageContent:
    """Apply a partial update; fields left as ``None`` keep their stored value."""
    if title is not None:
        page_content.title = validate_title(title)
    if content is not None:
        page_content.content = content
    await db_session.commit()
    await db_session.refresh(page_content)
    return page_content


async def delete_page_content(
    db_session: AsyncSession,
    *,
    page_content: PageContent,
) -> None:
    await db_session.delete(page_content)
    await db_session.commit()
