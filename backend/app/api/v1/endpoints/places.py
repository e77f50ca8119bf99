from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_venue_source
from app.core.config import get_settings
from app.schemas.venue import Venue
from app.services.venue_source import VenueSource
from app.utils.geo import GeoPoint

router = APIRouter(prefix="/places", tags=["Places"])


@router.get("", response_model=list[Venue])
async def search_places(
    venue_source: Annotated[VenueSource, Depends(get_venue_source)],
    lat: float = Query(ge=-90, le=90),
    lng: float = Query(ge=-180, le=180),
    radius: int | None = Query(default=None, gt=0, le=100_000),
    category: str | None = Query(default=None, max_length=50),
) -> list[Venue]:
    """임의 좌표 주변 장소 검색 (검색 실패 시 빈 목록)"""
    return await venue_source.search(
        GeoPoint(lat=lat, lng=lng),
        category,
        radius or get_settings().default_radius_meters,
    )
