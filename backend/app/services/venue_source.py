"""장소 검색 어댑터 (Foursquare Places)

외부 API 응답 스키마의 차이(버전별 id/좌표 위치)는 이 모듈에서만 흡수하고,
나머지 코드는 정규화된 Venue만 다룬다. 전송 오류/비정상 응답은 빈 목록으로
변환되어 상위 작업을 실패시키지 않는다.
"""

import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from app.core.config import get_settings
from app.core.telemetry import timed_operation
from app.schemas.venue import Venue, VenueLocation
from app.utils.geo import GeoPoint, haversine_m

logger = logging.getLogger(__name__)

# 사용자용 카테고리 힌트 → 검색어
VENUE_QUERIES = {
    "cafe": "cafe",
    "coffee": "coffee",
    "restaurant": "restaurant",
    "brunch": "brunch",
    "dinner": "restaurant",
    "bar": "bar",
    "park": "park",
    "museum": "museum",
    "library": "library",
    "mall": "shopping mall",
    "gym": "gym",
}
DEFAULT_VENUE_QUERY = "restaurant"

SEARCH_FIELDS = "fsq_place_id,name,location,categories,distance,latitude,longitude,website,tel"


def venue_query_for(venue_type: str | None) -> str:
    """카테고리 힌트를 검색어로 변환 (미등록 키는 그대로, 없으면 restaurant)"""
    if not venue_type:
        return DEFAULT_VENUE_QUERY
    key = venue_type.strip().lower()
    if not key:
        return DEFAULT_VENUE_QUERY
    return VENUE_QUERIES.get(key, key)


class VenueSource(Protocol):
    """장소 검색 계약"""

    async def search(
        self, midpoint: GeoPoint, venue_type: str | None, radius_meters: int
    ) -> list[Venue]:
        ...


class FoursquareVenueSource:
    """Foursquare Places 검색"""

    def __init__(
        self,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = get_settings()
        self.api_key = api_key if api_key is not None else self.settings.foursquare_api_key
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {self.api_key}",
            "X-Places-Api-Version": self.settings.foursquare_api_version,
        }

    async def search(
        self, midpoint: GeoPoint, venue_type: str | None, radius_meters: int
    ) -> list[Venue]:
        """중점 주변 장소 검색 (실패 시 빈 목록)"""
        if not self.api_key:
            logger.warning("[VenueSource] FOURSQUARE_API_KEY not set, skipping search")
            return []

        params = {
            "ll": f"{midpoint.lat},{midpoint.lng}",
            "radius": str(radius_meters or self.settings.default_radius_meters),
            "query": venue_query_for(venue_type),
            "limit": str(self.settings.venue_result_limit),
            "fields": SEARCH_FIELDS,
        }

        try:
            with timed_operation("venue_search_duration") as timer:
                async with httpx.AsyncClient(
                    timeout=self.settings.venue_search_timeout_seconds,
                    transport=self.transport,
                ) as client:
                    response = await client.get(
                        self.settings.foursquare_search_url,
                        params=params,
                        headers=self._headers(),
                    )
            if response.status_code != 200:
                logger.warning(
                    "[VenueSource] Search failed: status=%s body=%s",
                    response.status_code,
                    response.text[:300],
                )
                return []
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("[VenueSource] Search request error: %s", e)
            return []

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            logger.warning("[VenueSource] Unexpected response shape")
            return []

        venues = []
        for raw in results:
            try:
                venue = normalize_venue(raw, midpoint)
            except (ValidationError, TypeError, ValueError) as e:
                logger.warning("[VenueSource] Skipping malformed venue: %s", e)
                continue
            if venue is not None:
                venues.append(venue)

        logger.info(
            "[VenueSource] %d venues for query=%s (%.2fs)",
            len(venues),
            params["query"],
            timer.duration,
        )
        return venues


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _venue_coordinates(raw: dict[str, Any]) -> tuple[float | None, float | None]:
    """좌표 추출 (신규 API: 최상위 latitude/longitude, v3: geocodes.main)"""
    lat = raw.get("latitude")
    lng = raw.get("longitude")
    if lat is None or lng is None:
        main = _as_dict(_as_dict(raw.get("geocodes")).get("main"))
        lat = main.get("latitude")
        lng = main.get("longitude")
    try:
        return (float(lat), float(lng)) if lat is not None and lng is not None else (None, None)
    except (TypeError, ValueError):
        return None, None


def normalize_venue(raw: Any, midpoint: GeoPoint | None = None) -> Venue | None:
    """외부 검색 결과 1건을 Venue로 정규화 (이름 없는 결과는 버림)"""
    if not isinstance(raw, dict) or not raw.get("name"):
        return None

    location = _as_dict(raw.get("location"))
    lat, lng = _venue_coordinates(raw)

    distance = raw.get("distance")
    if distance is None and midpoint is not None and lat is not None and lng is not None:
        distance = round(haversine_m(midpoint, GeoPoint(lat=lat, lng=lng)))

    raw_categories = raw.get("categories")
    categories = [
        c["name"]
        for c in (raw_categories if isinstance(raw_categories, list) else [])
        if isinstance(c, dict) and c.get("name")
    ]

    return Venue(
        id=raw.get("fsq_place_id") or raw.get("fsq_id"),
        name=raw["name"],
        location=VenueLocation(
            address=location.get("address"),
            locality=location.get("locality"),
            region=location.get("region"),
            country=location.get("country"),
            formatted_address=location.get("formatted_address"),
            lat=lat,
            lng=lng,
        ),
        categories=categories,
        distance=distance,
        website=raw.get("website"),
        tel=raw.get("tel"),
    )
