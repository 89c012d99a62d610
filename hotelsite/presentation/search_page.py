from __future__ import annotations

from dataclasses import dataclass

from hotelsite.presentation.district_cascade import DistrictCascade
from hotelsite.theme import THEMES, ThemeDefinition, ThemeId, get_theme_definition
from hotelsite.theme_styles import ThemeStyles, resolve_styles


@dataclass(frozen=True)
class SelectOptionViewModel:
    value: str
    label: str
    selected: bool


@dataclass(frozen=True)
class LocationSelectViewModel:
    city_options: list[SelectOptionViewModel]
    district_options: list[SelectOptionViewModel]
    district_enabled: bool
    district_placeholder: str


@dataclass(frozen=True)
class SearchPageViewModel:
    theme: ThemeDefinition
    styles: ThemeStyles
    themes: tuple[ThemeDefinition, ...]
    location: LocationSelectViewModel


def build_search_page_view_model(
    *,
    theme: ThemeId,
    city: str | None = None,
    district: str | None = None,
) -> SearchPageViewModel:
    cascade = DistrictCascade(
        selected_city=city or "",
        selected_district=district or "",
    )
    return SearchPageViewModel(
        theme=get_theme_definition(theme),
        styles=resolve_styles(theme),
        themes=THEMES,
        location=_build_location_select(cascade),
    )


def _build_location_select(cascade: DistrictCascade) -> LocationSelectViewModel:
    return LocationSelectViewModel(
        city_options=[
            SelectOptionViewModel(value=value, label=label, selected=value == cascade.city)
            for value, label in cascade.city_options()
        ],
        district_options=[
            SelectOptionViewModel(value=value, label=label, selected=value == cascade.district)
            for value, label in cascade.district_options()
        ],
        district_enabled=cascade.is_district_enabled,
        district_placeholder=(
            "Select a district" if cascade.is_district_enabled else "Select a city first"
        ),
    )
