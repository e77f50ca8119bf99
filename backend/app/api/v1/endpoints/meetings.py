from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.dependencies import get_meeting_service, handle_service_error
from app.schemas import ErrorResponse
from app.schemas.meeting import (
    CreateMeetingRequest,
    CreateMeetingResponse,
    ExpireInvitationRequest,
    FinalizeRequest,
    FinalizeResponse,
    InviteParticipantsRequest,
    InviteParticipantsResponse,
    MeetingStatusResponse,
    OkResponse,
    SubmitLocationRequest,
    SuggestionsResponse,
)
from app.services.meeting_service import MeetingService

router = APIRouter(prefix="/meetings", tags=["Meetings"])


@router.post(
    "",
    response_model=CreateMeetingResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_meeting(
    data: CreateMeetingRequest,
    meeting_service: Annotated[MeetingService, Depends(get_meeting_service)],
) -> CreateMeetingResponse:
    """회의 생성 (owner + 초대자 초대 메일 발송)"""
    try:
        return await meeting_service.create_meeting(data)
    except ValueError as e:
        handle_service_error(e)


@router.get(
    "/{meeting_id}",
    response_model=MeetingStatusResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_meeting_status(
    meeting_id: UUID,
    meeting_service: Annotated[MeetingService, Depends(get_meeting_service)],
) -> MeetingStatusResponse:
    """회의 상태 (참여자 / 위치 / 중점)"""
    try:
        return await meeting_service.get_status(meeting_id)
    except ValueError as e:
        handle_service_error(e)


@router.post(
    "/{meeting_id}/locations",
    response_model=OkResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def submit_location(
    meeting_id: UUID,
    data: SubmitLocationRequest,
    meeting_service: Annotated[MeetingService, Depends(get_meeting_service)],
) -> OkResponse:
    """참여자 위치 제출"""
    try:
        return await meeting_service.submit_location(meeting_id, data)
    except ValueError as e:
        handle_service_error(e)


@router.get(
    "/{meeting_id}/suggestions",
    response_model=SuggestionsResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_suggestions(
    meeting_id: UUID,
    meeting_service: Annotated[MeetingService, Depends(get_meeting_service)],
) -> SuggestionsResponse:
    """중점 주변 장소 추천"""
    try:
        return await meeting_service.get_suggestions(meeting_id)
    except ValueError as e:
        handle_service_error(e)


@router.post(
    "/{meeting_id}/finalize",
    response_model=FinalizeResponse,
    responses={
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def finalize_meeting(
    meeting_id: UUID,
    data: FinalizeRequest,
    meeting_service: Annotated[MeetingService, Depends(get_meeting_service)],
) -> FinalizeResponse:
    """장소 확정 (owner 전용)"""
    try:
        return await meeting_service.finalize(meeting_id, data)
    except ValueError as e:
        handle_service_error(e)


@router.post(
    "/{meeting_id}/invitations",
    response_model=InviteParticipantsResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def invite_participants(
    meeting_id: UUID,
    data: InviteParticipantsRequest,
    meeting_service: Annotated[MeetingService, Depends(get_meeting_service)],
) -> InviteParticipantsResponse:
    """참여자 추가/재초대 (owner 전용)"""
    try:
        return await meeting_service.invite_participants(meeting_id, data)
    except ValueError as e:
        handle_service_error(e)


@router.post(
    "/{meeting_id}/invitations/expire",
    response_model=OkResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def expire_invitation(
    meeting_id: UUID,
    data: ExpireInvitationRequest,
    meeting_service: Annotated[MeetingService, Depends(get_meeting_service)],
) -> OkResponse:
    """초대 만료 (owner 전용)"""
    try:
        return await meeting_service.expire_invitation(meeting_id, data)
    except ValueError as e:
        handle_service_error(e)


@router.delete(
    "/{meeting_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def delete_meeting(
    meeting_id: UUID,
    meeting_service: Annotated[MeetingService, Depends(get_meeting_service)],
    email: str = Query(min_length=1),
    token: str = Query(min_length=1),
) -> Response:
    """회의 삭제 (owner 전용)"""
    try:
        await meeting_service.delete_meeting(meeting_id, email, token)
    except ValueError as e:
        handle_service_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
