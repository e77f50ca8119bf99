from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from app.schemas.venue import Venue


class CreateMeetingRequest(BaseModel):
    """회의 생성 요청"""

    title: str = Field(min_length=1, max_length=255)
    owner_email: EmailStr = Field(alias="ownerEmail")
    owner_name: str | None = Field(default=None, max_length=100, alias="ownerName")
    venue_type: str | None = Field(default=None, max_length=50, alias="venueType")
    radius_meters: int | None = Field(default=None, gt=0, le=100_000, alias="radiusMeters")
    # 구분자(쉼표/세미콜론/공백) 문자열 또는 목록
    invitees: str | list[str] | None = None

    class Config:
        populate_by_name = True


class MeetingResponse(BaseModel):
    """회의 응답"""

    id: UUID
    title: str
    owner_email: str = Field(serialization_alias="ownerEmail")
    owner_name: str | None = Field(default=None, serialization_alias="ownerName")
    venue_type: str | None = Field(serialization_alias="venueType")
    radius_meters: int = Field(serialization_alias="radiusMeters")
    status: str
    finalized_place: Venue | None = Field(default=None, serialization_alias="finalizedPlace")
    finalized_at: datetime | None = Field(default=None, serialization_alias="finalizedAt")
    created_at: datetime = Field(serialization_alias="createdAt")

    class Config:
        populate_by_name = True
        from_attributes = True


class InvitationSummary(BaseModel):
    """초대 요약 (토큰 제외)"""

    email: str
    role: str

    class Config:
        from_attributes = True


class CreateMeetingResponse(BaseModel):
    """회의 생성 응답"""

    meeting: MeetingResponse
    invites: list[InvitationSummary]
    owner_link: str = Field(serialization_alias="ownerLink")

    class Config:
        populate_by_name = True


class ParticipantResponse(BaseModel):
    """참여자 응답 (초대 + 위치 조인)"""

    email: str
    role: str
    status: str
    responded: bool


class LocationResponse(BaseModel):
    """제출된 위치 응답"""

    email: str
    lat: float
    lng: float
    provided_at: datetime = Field(serialization_alias="providedAt")

    class Config:
        populate_by_name = True
        from_attributes = True


class MidpointResponse(BaseModel):
    """구면 중점"""

    lat: float
    lng: float


class MeetingStatusResponse(BaseModel):
    """회의 상태 응답"""

    meeting: MeetingResponse
    participants: list[ParticipantResponse]
    locations: list[LocationResponse]
    midpoint: MidpointResponse | None = None


class SubmitLocationRequest(BaseModel):
    """참여자 위치 제출 요청"""

    email: str = Field(min_length=1, max_length=255)
    token: str = Field(min_length=1, max_length=64)
    lat: float
    lng: float


class OkResponse(BaseModel):
    """단순 성공 응답"""

    ok: bool = True


class SuggestionsResponse(BaseModel):
    """장소 추천 응답 (위치 2개 미만이면 ready=False)"""

    ready: bool
    reason: str | None = None
    midpoint: MidpointResponse | None = None
    venues: list[Venue] = Field(default_factory=list)


class FinalizeRequest(BaseModel):
    """장소 확정 요청 (owner 전용)"""

    token: str = Field(min_length=1, max_length=64)
    email: str = Field(min_length=1, max_length=255)
    place: Venue


class NotificationResult(BaseModel):
    """수신자별 알림 결과"""

    email: str
    sent: bool


class FinalizeResponse(BaseModel):
    """장소 확정 응답"""

    ok: bool = True
    meeting: MeetingResponse
    notifications: list[NotificationResult] = Field(default_factory=list)


class OwnerActionRequest(BaseModel):
    """owner 토큰 인증이 필요한 요청의 공통 필드"""

    token: str = Field(min_length=1, max_length=64)
    email: str = Field(min_length=1, max_length=255)


class InviteParticipantsRequest(OwnerActionRequest):
    """참여자 추가/재초대 요청"""

    invitees: str | list[str]


class InviteParticipantsResponse(BaseModel):
    """참여자 추가/재초대 응답"""

    invites: list[InvitationSummary]


class ExpireInvitationRequest(OwnerActionRequest):
    """초대 만료 요청"""

    target_email: str = Field(min_length=1, max_length=255, alias="targetEmail")

    class Config:
        populate_by_name = True
