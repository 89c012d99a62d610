from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ApiMeta(BaseModel):
    request_id: str | None = None


class SiteThemeUpdateRequest(BaseModel):
    theme: str


class SiteThemeData(BaseModel):
    theme: str
    updated_at: datetime | None = None


class SiteThemeEnvelope(BaseModel):
    data: SiteThemeData
    meta: ApiMeta


class ThemeDefinitionData(BaseModel):
    slug: str
    label: str
    description: str
    icon: str
    thumbnail: str
    accent_color: str
    color_scheme: str
    body_class: str


class ThemesListData(BaseModel):
    themes: list[ThemeDefinitionData]
    default_theme: str


class ThemesListEnvelope(BaseModel):
    data: ThemesListData
    meta: ApiMeta


class LocationOption(BaseModel):
    id: str
    name: str


class CitiesListData(BaseModel):
    cities: list[LocationOption]


class CitiesListEnvelope(BaseModel):
    data: CitiesListData
    meta: ApiMeta


class DistrictsListData(BaseModel):
    city: LocationOption
    districts: list[LocationOption]


class DistrictsListEnvelope(BaseModel):
    data: DistrictsListData
    meta: ApiMeta


class MessageData(BaseModel):
    message: str


class MessageEnvelope(BaseModel):
    data: MessageData
    meta: ApiMeta


class PageContentCreateRequest(BaseModel):
    page_key: str
    title: str
    content: str


class PageContentUpdateRequest(BaseModel):
    title: str | None = None
    content: str | None = None


class PageContentData(BaseModel):
    id: int
    page_key: str
    title: str
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PageContentEnvelope(BaseModel):
    data: PageContentData
    meta: ApiMeta


class PageContentsListData(BaseModel):
    page_contents: list[PageContentData]


class PageContentsListEnvelope(BaseModel):
    data: PageContentsListData
    meta: ApiMeta
