"""Meetup Repository 인터페이스 정의

Protocol 기반 인터페이스로 구조적 서브타이핑 지원.
SQLAlchemy 구현체(repository.py)와 인메모리 Mock 구현체(mock_repository.py)가
같은 계약을 따른다.
"""

from typing import Any, Protocol
from uuid import UUID

from app.models.invitation import Invitation
from app.models.location import MeetingLocation
from app.models.meeting import Meeting


class IMeetingRepository(Protocol):
    """회의 저장소"""

    async def create(
        self,
        *,
        title: str,
        owner_email: str,
        owner_name: str | None,
        venue_type: str | None,
        radius_meters: int,
    ) -> Meeting:
        """collecting 상태의 회의 생성"""
        ...

    async def get(self, meeting_id: UUID) -> Meeting | None:
        """회의 조회"""
        ...

    async def finalize(self, meeting_id: UUID, place: dict[str, Any]) -> Meeting | None:
        """collecting → finalized 전이 (원자적 조건부 업데이트)

        Returns:
            전이된 회의. 회의가 없거나 이미 확정된 경우 None
        """
        ...

    async def delete(self, meeting_id: UUID) -> bool:
        """회의 삭제 (초대/위치 cascade)"""
        ...


class IInvitationRepository(Protocol):
    """초대 레지스트리 - (meeting, email) 당 정확히 1건"""

    async def create_or_replace(
        self, meeting_id: UUID, email: str, role: str
    ) -> Invitation:
        """새 토큰 발급 후 upsert (기존 건은 token/role/status 교체, 응답 이력 유지)"""
        ...

    async def validate(self, meeting_id: UUID, email: str, token: str) -> Invitation:
        """(meeting, email, token) 일치 및 만료 여부 확인

        Raises:
            ValueError: INVALID_TOKEN, INVITATION_EXPIRED
        """
        ...

    async def mark_responded(self, invitation_id: UUID) -> None:
        """pending인 경우에만 accepted + responded_at 기록"""
        ...

    async def expire(self, invitation_id: UUID) -> None:
        """초대 만료 처리"""
        ...

    async def get_by_email(self, meeting_id: UUID, email: str) -> Invitation | None:
        """이메일로 초대 조회"""
        ...

    async def list_by_meeting(self, meeting_id: UUID) -> list[Invitation]:
        """owner 먼저, 이후 이메일 순"""
        ...


class ILocationRepository(Protocol):
    """위치 원장 - (meeting, email) 당 현재 위치 1건"""

    async def upsert(
        self, meeting_id: UUID, email: str, lat: float, lng: float
    ) -> MeetingLocation:
        """위치 저장 또는 덮어쓰기 (제출 시각 갱신)

        Raises:
            ValueError: INVALID_COORDINATES
        """
        ...

    async def list_by_meeting(self, meeting_id: UUID) -> list[MeetingLocation]:
        """회의의 전체 위치 (최근 제출 순)"""
        ...
