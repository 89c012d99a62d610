from __future__ import annotations

from fastapi import APIRouter, Request

from hotelsite.api.errors import ApiException
from hotelsite.api.responses import success_payload
from hotelsite.api.schemas import CitiesListEnvelope, DistrictsListEnvelope
from hotelsite.locations import CITIES, find_city

router = APIRouter(prefix="/locations", tags=["api-locations"])


@router.get(
    "/cities",
    response_model=CitiesListEnvelope,
)
async def list_cities(request: Request):
    return success_payload(
        request,
        data={"cities": [{"id": city.id, "name": city.name} for city in CITIES]},
    )


@router.get(
    "/cities/{city_id}/districts",
    response_model=DistrictsListEnvelope,
)
async def list_districts(city_id: str, request: Request):
    city = find_city(city_id)
    if city is None:
        raise ApiException(
            status_code=404,
            code="city_not_found",
            message="City not found.",
        )
    return success_payload(
        request,
        data={
            "city": {"id": city.id, "name": city.name},
            "districts": [
                {"id": district.id, "name": district.name} for district in city.districts
            ],
        },
    )
