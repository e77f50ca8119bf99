"""공유 API dependencies - 엔드포인트 간 중복 제거"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.services.meeting_service import MeetingService
from app.services.notifier import EmailNotifier, Notifier
from app.services.venue_source import FoursquareVenueSource, VenueSource

# ===== Adapter Dependencies =====


def get_venue_source() -> VenueSource:
    """장소 검색 어댑터 의존성"""
    return FoursquareVenueSource()


def get_notifier() -> Notifier:
    """이메일 알림 어댑터 의존성"""
    return EmailNotifier()


def get_meeting_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    venue_source: Annotated[VenueSource, Depends(get_venue_source)],
    notifier: Annotated[Notifier, Depends(get_notifier)],
) -> MeetingService:
    """MeetingService 의존성"""
    return MeetingService(db, venue_source=venue_source, notifier=notifier)


# ===== Service Error Handling =====

# 서비스 레이어에서 발생하는 에러 코드와 HTTP 응답 매핑
# (status_code, error_code, message)
SERVICE_ERROR_MAPPING: dict[str, tuple[int, str, str]] = {
    # 입력 검증
    "INVALID_TITLE": (400, "INVALID_TITLE", "Title is required"),
    "INVALID_OWNER_EMAIL": (400, "INVALID_OWNER_EMAIL", "Owner email is invalid"),
    "INVALID_INVITEE_EMAIL": (400, "INVALID_INVITEE_EMAIL", "One or more invitee emails are invalid"),
    "INVALID_COORDINATES": (400, "INVALID_COORDINATES", "Latitude/longitude out of range"),
    "INVALID_RADIUS": (400, "INVALID_RADIUS", "Radius must be positive"),
    "CANNOT_EXPIRE_OWNER": (400, "CANNOT_EXPIRE_OWNER", "The owner invitation cannot be expired"),
    # 토큰 인증
    "INVALID_TOKEN": (403, "INVALID_TOKEN", "Invalid invitation token"),
    "INVITATION_EXPIRED": (403, "INVITATION_EXPIRED", "Invitation has expired"),
    "NOT_OWNER": (403, "FORBIDDEN", "Only the meeting owner can do this"),
    # 조회
    "MEETING_NOT_FOUND": (404, "NOT_FOUND", "Meeting not found"),
    "INVITATION_NOT_FOUND": (404, "NOT_FOUND", "Invitation not found"),
    # 상태 충돌
    "MEETING_FINALIZED": (409, "MEETING_FINALIZED", "Meeting is already finalized"),
    "MEETING_ALREADY_FINALIZED": (409, "MEETING_ALREADY_FINALIZED", "Meeting is already finalized"),
}


def handle_service_error(error: ValueError, default_message: str = "Validation error") -> None:
    """서비스 레이어 에러를 HTTPException으로 변환

    Args:
        error: 서비스에서 발생한 ValueError (에러 코드가 str로 전달됨)
        default_message: 매핑되지 않은 에러의 기본 메시지

    Raises:
        HTTPException: 매핑된 HTTP 에러 응답
    """
    error_code = str(error)

    if error_code in SERVICE_ERROR_MAPPING:
        status_code, code, message = SERVICE_ERROR_MAPPING[error_code]
        raise HTTPException(
            status_code=status_code,
            detail={"error": code, "message": message},
        )

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"error": "VALIDATION_ERROR", "message": default_message},
    )
