"""Foursquare 장소 검색 어댑터 테스트

httpx.MockTransport로 외부 API를 대체합니다.
"""

import httpx
import pytest

from app.services.venue_source import (
    DEFAULT_VENUE_QUERY,
    FoursquareVenueSource,
    normalize_venue,
    venue_query_for,
)
from app.utils.geo import GeoPoint

MIDPOINT = GeoPoint(lat=40.1, lng=-75.1)


def _source(handler) -> FoursquareVenueSource:
    return FoursquareVenueSource(api_key="test-key", transport=httpx.MockTransport(handler))


# ===== 카테고리 매핑 =====


@pytest.mark.parametrize(
    ("hint", "expected"),
    [
        ("coffee", "coffee"),
        ("dinner", "restaurant"),
        ("  Mall ", "shopping mall"),
        ("karaoke", "karaoke"),
        (None, DEFAULT_VENUE_QUERY),
        ("   ", DEFAULT_VENUE_QUERY),
    ],
)
def test_venue_query_for(hint, expected):
    assert venue_query_for(hint) == expected


# ===== search =====


async def test_search_sends_query_and_normalizes():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(
            200,
            json={
                "results": [
                    {
                        "fsq_place_id": "abc",
                        "name": "Cafe X",
                        "latitude": 40.1005,
                        "longitude": -75.1002,
                        "distance": 120,
                        "categories": [{"name": "Coffee Shop"}],
                        "location": {"formatted_address": "1 Main St", "locality": "Philadelphia"},
                        "tel": "+1 555",
                    },
                    {"name": ""},
                ]
            },
        )

    venues = await _source(handler).search(MIDPOINT, "dinner", 1500)

    request = captured["request"]
    assert request.headers["Authorization"] == "Bearer test-key"
    assert "X-Places-Api-Version" in request.headers
    assert request.url.params["ll"] == "40.1,-75.1"
    assert request.url.params["radius"] == "1500"
    assert request.url.params["query"] == "restaurant"
    assert request.url.params["limit"] == "15"

    assert len(venues) == 1
    venue = venues[0]
    assert venue.id == "abc"
    assert venue.name == "Cafe X"
    assert venue.distance == 120
    assert venue.categories == ["Coffee Shop"]
    assert venue.location.formatted_address == "1 Main St"
    assert venue.location.lat == pytest.approx(40.1005)
    assert venue.tel == "+1 555"


async def test_search_non_200_returns_empty():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "unauthorized"})

    assert await _source(handler).search(MIDPOINT, None, 3000) == []


async def test_search_transport_error_returns_empty():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    assert await _source(handler).search(MIDPOINT, None, 3000) == []


async def test_search_invalid_json_returns_empty():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    assert await _source(handler).search(MIDPOINT, None, 3000) == []


async def test_search_unexpected_shape_returns_empty():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"results": {"name": "not a list"}})

    assert await _source(handler).search(MIDPOINT, None, 3000) == []


async def test_search_skips_malformed_results():
    """형태가 잘못된 결과 1건은 건너뛰고 나머지는 반환"""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "results": [
                    {"name": "A", "location": ["x"]},
                    {"name": "B"},
                    {"name": "C", "categories": 5},
                    {"name": "D", "geocodes": {"main": "bad"}},
                    {"name": "E", "location": {"address": {"street": 1}}},
                    "not-a-dict",
                ]
            },
        )

    venues = await _source(handler).search(MIDPOINT, None, 3000)

    assert [v.name for v in venues] == ["A", "B", "C", "D"]
    assert venues[0].location.address is None
    assert venues[2].categories == []
    assert venues[3].location.lat is None


async def test_search_without_api_key_skips_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("should not be called")

    source = FoursquareVenueSource(api_key="", transport=httpx.MockTransport(handler))

    assert await source.search(MIDPOINT, "coffee", 3000) == []


# ===== normalize_venue =====


def test_normalize_venue_legacy_shape_with_distance_fallback():
    """v3 응답 (fsq_id, geocodes.main) + distance 누락 시 haversine 계산"""
    raw = {
        "fsq_id": "legacy-1",
        "name": "Old Diner",
        "geocodes": {"main": {"latitude": 40.1, "longitude": -75.0}},
        "location": {"address": "2 Side St"},
    }

    venue = normalize_venue(raw, MIDPOINT)

    assert venue.id == "legacy-1"
    assert venue.location.lat == 40.1
    assert venue.location.lng == -75.0
    # 위도 40.1에서 경도 0.1도 ≈ 8.5km
    assert venue.distance == pytest.approx(8500, rel=0.02)


def test_normalize_venue_without_coordinates():
    venue = normalize_venue({"name": "Somewhere"}, MIDPOINT)

    assert venue.id is None
    assert venue.location.lat is None
    assert venue.distance is None


@pytest.mark.parametrize("raw", [None, "text", {"id": "x"}, {"name": None}])
def test_normalize_venue_rejects_nameless(raw):
    assert normalize_venue(raw, MIDPOINT) is None


@pytest.mark.parametrize(
    "raw",
    [
        {"name": "A", "location": "1 Main St"},
        {"name": "A", "geocodes": ["x"]},
        {"name": "A", "categories": {"name": "Cafe"}},
    ],
)
def test_normalize_venue_tolerates_wrong_nested_types(raw):
    venue = normalize_venue(raw, MIDPOINT)

    assert venue.name == "A"
    assert venue.categories == []
    assert venue.location.lat is None
