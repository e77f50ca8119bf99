"""지리 좌표 유틸리티

구면 중점(centroid) 계산과 두 좌표 사이의 대원 거리 계산.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass

EARTH_RADIUS_M = 6_371_000.0


@dataclass(frozen=True)
class GeoPoint:
    """위도/경도 (십진 도 단위)"""

    lat: float
    lng: float


def is_valid_coordinate(lat: float, lng: float) -> bool:
    """위도 [-90, 90], 경도 [-180, 180] 범위 확인 (NaN 거부)"""
    if math.isnan(lat) or math.isnan(lng):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


def compute_geographic_midpoint(points: Iterable[GeoPoint]) -> GeoPoint:
    """좌표 집합의 구면 중점 계산

    각 좌표를 단위 벡터 (x, y, z)로 변환해 평균을 낸 뒤 atan2로 다시
    위도/경도로 변환한다. 날짜변경선(±180°)을 넘는 좌표도 올바르게 처리한다.

    Raises:
        ValueError: 좌표가 하나도 없는 경우
    """
    x = y = z = 0.0
    count = 0
    for point in points:
        lat = math.radians(point.lat)
        lng = math.radians(point.lng)
        x += math.cos(lat) * math.cos(lng)
        y += math.cos(lat) * math.sin(lng)
        z += math.sin(lat)
        count += 1

    if count == 0:
        raise ValueError("NO_POINTS")

    x /= count
    y /= count
    z /= count

    lng = math.atan2(y, x)
    hyp = math.sqrt(x * x + y * y)
    lat = math.atan2(z, hyp)
    return GeoPoint(lat=math.degrees(lat), lng=math.degrees(lng))


def haversine_m(a: GeoPoint, b: GeoPoint) -> float:
    """두 좌표 사이의 대원 거리 (미터)"""
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = lat2 - lat1
    dlng = math.radians(b.lng - a.lng)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(h))
