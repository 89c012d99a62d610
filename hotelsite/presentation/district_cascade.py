from __future__ import annotations

import logging
from typing import Callable, Sequence

from hotelsite.locations import CITIES, City, District, find_city

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[str], None]


def _ignore(_value: str) -> None:
    return None


class DistrictCascade:
    """City -> district selection state for search and address forms.

    The selected district is always a member of the selected city's
    district list; anything else is cleared to ``""``.
    """

    def __init__(
        self,
        *,
        on_city_change: ChangeCallback | None = None,
        on_district_change: ChangeCallback | None = None,
        selected_city: str = "",
        selected_district: str = "",
        cities: Sequence[City] = CITIES,
    ) -> None:
        self._cities = tuple(cities)
        self._on_city_change = on_city_change or _ignore
        self._on_district_change = on_district_change or _ignore
        self._city = selected_city or ""
        # Districts come from the pre-selected city before the pre-selected
        # district is checked against them.
        city = find_city(self._city, self._cities)
        self._districts: tuple[District, ...] = city.districts if city else ()
        self._district = selected_district or ""
        if self._district and not self._has_district(self._district):
            self._district = ""
            self._on_district_change("")

    @property
    def city(self) -> str:
        return self._city

    @property
    def district(self) -> str:
        return self._district

    @property
    def districts(self) -> tuple[District, ...]:
        return self._districts

    @property
    def cities(self) -> tuple[City, ...]:
        return self._cities

    @property
    def is_district_enabled(self) -> bool:
        return len(self._districts) > 0

    def select_city(self, city_id: str) -> None:
        self._city = city_id or ""
        self._on_city_change(self._city)

        city = find_city(self._city, self._cities)
        if city is None:
            self._districts = ()
            self._district = ""
            self._on_district_change("")
            return

        self._districts = city.districts
        if not self._has_district(self._district):
            self._district = ""
            self._on_district_change("")

    def select_district(self, district_id: str) -> bool:
        if district_id and not self._has_district(district_id):
            logger.debug(
                "district_cascade.district_ignored",
                extra={
                    "event": "district_cascade.district_ignored",
                    "city": self._city,
                    "district": district_id,
                },
            )
            return False
        self._district = district_id or ""
        self._on_district_change(self._district)
        return True

    def city_options(self) -> list[tuple[str, str]]:
        return [(city.id, city.name) for city in self._cities]

    def district_options(self) -> list[tuple[str, str]]:
        return [(district.id, district.name) for district in self._districts]

    def _has_district(self, district_id: str) -> bool:
        return any(district.id == district_id for district in self._districts)
