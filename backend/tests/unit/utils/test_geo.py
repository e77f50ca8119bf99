"""지리 좌표 유틸리티 테스트"""

import math

import pytest

from app.utils.geo import GeoPoint, compute_geographic_midpoint, haversine_m, is_valid_coordinate


def test_midpoint_of_single_point_is_itself():
    point = GeoPoint(lat=40.0, lng=-75.0)

    midpoint = compute_geographic_midpoint([point])

    assert midpoint.lat == pytest.approx(40.0, abs=1e-9)
    assert midpoint.lng == pytest.approx(-75.0, abs=1e-9)


def test_midpoint_across_antimeridian():
    """날짜변경선 양쪽 좌표의 중점은 경도 ±180 (단순 평균의 0이 아님)"""
    midpoint = compute_geographic_midpoint([GeoPoint(0.0, 179.0), GeoPoint(0.0, -179.0)])

    assert abs(midpoint.lng) == pytest.approx(180.0, abs=1e-6)
    assert midpoint.lat == pytest.approx(0.0, abs=1e-9)


def test_midpoint_of_nearby_points():
    midpoint = compute_geographic_midpoint([GeoPoint(40.0, -75.0), GeoPoint(40.2, -75.2)])

    assert midpoint.lat == pytest.approx(40.1, abs=1e-3)
    assert midpoint.lng == pytest.approx(-75.1, abs=1e-3)


def test_midpoint_accepts_generator():
    points = (GeoPoint(0.0, lng) for lng in (10.0, 20.0, 30.0))

    midpoint = compute_geographic_midpoint(points)

    assert midpoint.lng == pytest.approx(20.0, abs=1e-9)


def test_midpoint_without_points():
    with pytest.raises(ValueError, match="NO_POINTS"):
        compute_geographic_midpoint([])


@pytest.mark.parametrize(
    ("lat", "lng", "expected"),
    [
        (0.0, 0.0, True),
        (90.0, 180.0, True),
        (-90.0, -180.0, True),
        (90.1, 0.0, False),
        (0.0, -180.1, False),
        (math.nan, 0.0, False),
    ],
)
def test_is_valid_coordinate(lat, lng, expected):
    assert is_valid_coordinate(lat, lng) is expected


def test_haversine_one_degree_of_longitude_at_equator():
    distance = haversine_m(GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0))

    assert distance == pytest.approx(111_195, rel=1e-3)


def test_haversine_same_point_is_zero():
    point = GeoPoint(37.5665, 126.978)

    assert haversine_m(point, point) == 0.0
