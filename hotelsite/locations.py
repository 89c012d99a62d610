from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Sequence


@dataclass(frozen=True)
class District:
    id: str
    name: str


@dataclass(frozen=True)
class City:
    id: str
    name: str
    districts: tuple[District, ...]

    def has_district(self, district_id: str) -> bool:
        return any(district.id == district_id for district in self.districts)


def _city(city_id: str, name: str, districts: Sequence[tuple[str, str]]) -> City:
    return City(
        id=city_id,
        name=name,
        districts=tuple(District(id=d_id, name=d_name) for d_id, d_name in districts),
    )


CITIES: Final[tuple[City, ...]] = (
    _city(
        "istanbul",
        "İstanbul",
        (
            ("kadikoy", "Kadıköy"),
            ("besiktas", "Beşiktaş"),
            ("beyoglu", "Beyoğlu"),
            ("fatih", "Fatih"),
            ("sisli", "Şişli"),
            ("uskudar", "Üsküdar"),
        ),
    ),
    _city(
        "ankara",
        "Ankara",
        (
            ("cankaya", "Çankaya"),
            ("kecioren", "Keçiören"),
            ("yenimahalle", "Yenimahalle"),
        ),
    ),
    _city(
        "izmir",
        "İzmir",
        (
            ("konak", "Konak"),
            ("bornova", "Bornova"),
            ("karsiyaka", "Karşıyaka"),
            ("cesme", "Çeşme"),
        ),
    ),
    _city(
        "antalya",
        "Antalya",
        (
            ("muratpasa", "Muratpaşa"),
            ("konyaalti", "Konyaaltı"),
            ("alanya", "Alanya"),
            ("kemer", "Kemer"),
            ("kas", "Kaş"),
        ),
    ),
    _city(
        "mugla",
        "Muğla",
        (
            ("bodrum", "Bodrum"),
            ("fethiye", "Fethiye"),
            ("marmaris", "Marmaris"),
            ("datca", "Datça"),
        ),
    ),
    _city(
        "nevsehir",
        "Nevşehir",
        (
            ("goreme", "Göreme"),
            ("urgup", "Ürgüp"),
            ("avanos", "Avanos"),
        ),
    ),
)


def find_city(city_id: str | None, cities: Sequence[City] = CITIES) -> City | None:
    if not city_id:
        return None
    for city in cities:
        if city.id == city_id:
            return city
    return None
