from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hotelsite.api.deps import require_api_admin
from hotelsite.api.errors import ApiException
from hotelsite.api.responses import success_payload
from hotelsite.api.schemas import (
    MessageEnvelope,
    PageContentCreateRequest,
    PageContentEnvelope,
    PageContentsListEnvelope,
    PageContentUpdateRequest,
)
from hotelsite.db.session import get_db_session
from hotelsite.services import page_contents as page_content_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/page-contents", tags=["api-page-contents"])


def _serialize_page_content(page_content) -> dict[str, object]:
    return {
        "id": int(page_content.id),
        "page_key": page_content.page_key,
        "title": page_content.title,
        "content": page_content.content,
        "created_at": page_content.created_at,
        "updated_at": page_content.updated_at,
    }


def _not_found() -> ApiException:
    return ApiException(
        status_code=404,
        code="page_content_not_found",
        message="Page content not found.",
    )


async def _get_or_404(db_session: AsyncSession, page_key: str):
    page_content = await page_content_service.get_page_content(
        db_session,
        page_key=page_key,
    )
    if page_content is None:
        raise _not_found()
    return page_content


@router.get(
    "",
    response_model=PageContentsListEnvelope,
)
async def list_page_contents(
    request: Request,
    db_session: AsyncSession = Depends(get_db_session),
):
    page_contents = await page_content_service.list_page_contents(db_session)
    return success_payload(
        request,
        data={
            "page_contents": [_serialize_page_content(item) for item in page_contents],
        },
    )


@router.get(
    "/{page_key}",
    response_model=PageContentEnvelope,
)
async def get_page_content(
    page_key: str,
    request: Request,
    db_session: AsyncSession = Depends(get_db_session),
):
    page_content = await _get_or_404(db_session, page_key)
    return success_payload(
        request,
        data=_serialize_page_content(page_content),
    )


@router.post(
    "",
    response_model=PageContentEnvelope,
    status_code=201,
    dependencies=[Depends(require_api_admin)],
)
async def create_page_content(
    payload: PageContentCreateRequest,
    request: Request,
    db_session: AsyncSession = Depends(get_db_session),
):
    try:
        created = await page_content_service.create_page_content(
            db_session,
            page_key=payload.page_key,
            title=payload.title,
            content=payload.content,
        )
    except page_content_service.PageContentConflictError as exc:
        raise ApiException(
            status_code=400,
            code="page_content_exists",
            message=str(exc),
        ) from exc
    except page_content_service.PageContentServiceError as exc:
        raise ApiException(
            status_code=400,
            code="invalid_page_content",
            message=str(exc),
        ) from exc
    logger.info(
        "api.page_contents.created",
        extra={
            "event": "api.page_contents.created",
            "page_key": created.page_key,
            "page_content_id": created.id,
        },
    )
    return success_payload(
        request,
        data=_serialize_page_content(created),
    )


@router.put(
    "/{page_key}",
    response_model=PageContentEnvelope,
    dependencies=[Depends(require_api_admin)],
)
@router.patch(
    "/{page_key}",
    response_model=PageContentEnvelope,
    dependencies=[Depends(require_api_admin)],
)
async def update_page_content(
    page_key: str,
    payload: PageContentUpdateRequest,
    request: Request,
    db_session: AsyncSession = Depends(get_db_session),
):
    page_content = await _get_or_404(db_session, page_key)
    try:
        updated = await page_content_service.update_page_content(
            db_session,
            page_content=page_content,
            title=payload.title,
            content=payload.content,
        )
    except page_content_service.PageContentServiceError as exc:
        raise ApiException(
            status_code=400,
            code="invalid_page_content",
            message=str(exc),
        ) from exc
    logger.info(
        "api.page_contents.updated",
        extra={
            "event": "api.page_contents.updated",
            "page_key": updated.page_key,
            "fields": sorted(payload.model_dump(exclude_none=True)),
        },
    )
    return success_payload(
        request,
        data=_serialize_page_content(updated),
    )


@router.delete(
    "/{page_key}",
    response_model=MessageEnvelope,
    dependencies=[Depends(require_api_admin)],
)
async def delete_page_content(
    page_key: str,
    request: Request,
    db_session: AsyncSession = Depends(get_db_session),
):
    page_content = await _get_or_404(db_session, page_key)
    await page_content_service.delete_page_content(db_session, page_content=page_content)
    logger.info(
        "api.page_contents.deleted",
        extra={"event": "api.page_contents.deleted", "page_key": page_key},
    )
    return success_payload(
        request,
        data={"message": "Page content deleted."},
    )
