from pydantic import BaseModel, Field


class VenueLocation(BaseModel):
    """장소 주소/좌표 (정규화)"""

    address: str | None = None
    locality: str | None = None
    region: str | None = None
    country: str | None = None
    formatted_address: str | None = None
    lat: float | None = None
    lng: float | None = None


class Venue(BaseModel):
    """외부 장소 검색 결과를 공통 형태로 정규화한 장소"""

    id: str | None = None
    name: str = Field(min_length=1, max_length=255)
    location: VenueLocation = Field(default_factory=VenueLocation)
    categories: list[str] = Field(default_factory=list)
    distance: float | None = None  # 중점으로부터의 거리 (미터)
    website: str | None = None
    tel: str | None = None
