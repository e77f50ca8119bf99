"""회의 조율 서비스

회의 생명주기(collecting → finalized)를 관리하고, 초대 레지스트리 / 위치 원장 /
장소 검색 / 이메일 알림을 조합한다. 인증은 초대 링크의 (meeting, email, token)
삼중 일치로만 이루어진다.
"""

import asyncio
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.telemetry import record_counter
from app.models.invitation import Invitation, InvitationRole
from app.models.meeting import Meeting
from app.repositories.meetup import (
    IInvitationRepository,
    ILocationRepository,
    IMeetingRepository,
    InvitationRepository,
    LocationRepository,
    MeetingRepository,
)
from app.schemas.meeting import (
    CreateMeetingRequest,
    CreateMeetingResponse,
    ExpireInvitationRequest,
    FinalizeRequest,
    FinalizeResponse,
    InvitationSummary,
    InviteParticipantsRequest,
    InviteParticipantsResponse,
    LocationResponse,
    MeetingResponse,
    MeetingStatusResponse,
    MidpointResponse,
    NotificationResult,
    OkResponse,
    ParticipantResponse,
    SubmitLocationRequest,
    SuggestionsResponse,
)
from app.services.email_templates import EmailContent, finalized_email, invite_email, meeting_link
from app.services.notifier import EmailNotifier, Notifier
from app.services.venue_source import FoursquareVenueSource, VenueSource
from app.utils.email import is_valid_email, normalize_email, split_invitees
from app.utils.geo import GeoPoint, compute_geographic_midpoint, is_valid_coordinate

logger = logging.getLogger(__name__)

MIN_LOCATIONS_FOR_MIDPOINT = 2
NOT_READY_REASON = "need at least two locations"


class MeetingService:
    """회의 조율 서비스"""

    def __init__(
        self,
        db: AsyncSession,
        venue_source: VenueSource | None = None,
        notifier: Notifier | None = None,
    ):
        self.db = db
        self.settings = get_settings()
        self.meeting_repo: IMeetingRepository = MeetingRepository(db)
        self.invitation_repo: IInvitationRepository = InvitationRepository(db)
        self.location_repo: ILocationRepository = LocationRepository(db)
        self.venue_source: VenueSource = venue_source or FoursquareVenueSource()
        self.notifier: Notifier = notifier or EmailNotifier()

    async def create_meeting(self, data: CreateMeetingRequest) -> CreateMeetingResponse:
        """회의 생성 + owner/초대자 초대 발급 + 초대 메일 발송 (메일 실패는 무시)"""
        title = data.title.strip()
        if not title:
            raise ValueError("INVALID_TITLE")

        owner_email = normalize_email(str(data.owner_email))
        if not is_valid_email(owner_email):
            raise ValueError("INVALID_OWNER_EMAIL")

        radius = (
            self.settings.default_radius_meters
            if data.radius_meters is None
            else data.radius_meters
        )
        if radius <= 0:
            raise ValueError("INVALID_RADIUS")

        invitees = split_invitees(data.invitees)
        if any(not is_valid_email(email) for email in invitees):
            raise ValueError("INVALID_INVITEE_EMAIL")

        venue_type = (data.venue_type or "").strip() or None

        meeting = await self.meeting_repo.create(
            title=title,
            owner_email=owner_email,
            owner_name=data.owner_name,
            venue_type=venue_type,
            radius_meters=radius,
        )

        # owner가 항상 첫 번째, 초대 목록의 owner 이메일은 중복 제거
        invitations = [
            await self.invitation_repo.create_or_replace(
                meeting.id, owner_email, InvitationRole.OWNER.value
            )
        ]
        for email in invitees:
            if email == owner_email:
                continue
            invitations.append(
                await self.invitation_repo.create_or_replace(
                    meeting.id, email, InvitationRole.INVITEE.value
                )
            )

        # 초대 링크가 메일 도착 전에 유효하도록 먼저 커밋
        await self.db.commit()
        record_counter("meetings_created")
        logger.info(
            "[Meeting] Created meeting %s with %d invitations", meeting.id, len(invitations)
        )

        for invitation in invitations:
            await self._send_invite(meeting, invitation)

        owner = invitations[0]
        return CreateMeetingResponse(
            meeting=MeetingResponse.model_validate(meeting),
            invites=[InvitationSummary(email=inv.email, role=inv.role) for inv in invitations],
            owner_link=self._link(meeting, owner),
        )

    async def get_status(self, meeting_id: UUID) -> MeetingStatusResponse:
        """회의 상태 조회 (참여자 응답 여부 + 위치 2개 이상이면 중점)"""
        meeting = await self._get_meeting_or_raise(meeting_id)
        invitations = await self.invitation_repo.list_by_meeting(meeting_id)
        locations = await self.location_repo.list_by_meeting(meeting_id)

        located_emails = {loc.email for loc in locations}
        participants = [
            ParticipantResponse(
                email=inv.email,
                role=inv.role,
                status=inv.status,
                responded=inv.responded_at is not None or inv.email in located_emails,
            )
            for inv in invitations
        ]

        midpoint = None
        if len(locations) >= MIN_LOCATIONS_FOR_MIDPOINT:
            midpoint = self._midpoint(locations)

        return MeetingStatusResponse(
            meeting=MeetingResponse.model_validate(meeting),
            participants=participants,
            locations=[LocationResponse.model_validate(loc) for loc in locations],
            midpoint=midpoint,
        )

    async def submit_location(
        self, meeting_id: UUID, data: SubmitLocationRequest
    ) -> OkResponse:
        """참여자 위치 제출 (재제출 시 덮어쓰기, 확정된 회의는 거부)"""
        meeting = await self._get_meeting_or_raise(meeting_id)

        if not is_valid_coordinate(data.lat, data.lng):
            raise ValueError("INVALID_COORDINATES")

        invitation = await self.invitation_repo.validate(meeting_id, data.email, data.token)

        if meeting.is_finalized:
            raise ValueError("MEETING_FINALIZED")

        await self.location_repo.upsert(meeting_id, invitation.email, data.lat, data.lng)
        await self.invitation_repo.mark_responded(invitation.id)

        record_counter("locations_submitted")
        logger.info("[Meeting] Location submitted: meeting=%s email=%s", meeting_id, invitation.email)
        return OkResponse()

    async def get_suggestions(self, meeting_id: UUID) -> SuggestionsResponse:
        """중점 주변 장소 추천 (위치 2개 미만이면 ready=False)"""
        meeting = await self._get_meeting_or_raise(meeting_id)
        locations = await self.location_repo.list_by_meeting(meeting_id)

        if len(locations) < MIN_LOCATIONS_FOR_MIDPOINT:
            return SuggestionsResponse(ready=False, reason=NOT_READY_REASON)

        midpoint = self._midpoint(locations)
        venues = await self.venue_source.search(
            GeoPoint(lat=midpoint.lat, lng=midpoint.lng),
            meeting.venue_type,
            meeting.radius_meters or self.settings.default_radius_meters,
        )
        return SuggestionsResponse(ready=True, midpoint=midpoint, venues=venues)

    async def finalize(self, meeting_id: UUID, data: FinalizeRequest) -> FinalizeResponse:
        """장소 확정 (owner 전용, 1회) 후 전원에게 알림 (알림 실패는 확정에 영향 없음)"""
        meeting = await self._get_meeting_or_raise(meeting_id)
        await self._require_owner(meeting_id, data.email, data.token)

        if meeting.is_finalized:
            raise ValueError("MEETING_ALREADY_FINALIZED")

        updated = await self.meeting_repo.finalize(meeting_id, data.place.model_dump())
        if updated is None:
            # 동시 확정 요청에서 진 경우
            raise ValueError("MEETING_ALREADY_FINALIZED")

        await self.db.commit()
        record_counter("meetings_finalized")
        logger.info("[Meeting] Finalized meeting %s at %s", meeting_id, data.place.name)

        invitations = await self.invitation_repo.list_by_meeting(meeting_id)
        content = finalized_email(
            updated.title,
            data.place,
            meeting_link(self.settings.public_base_url, str(updated.id)),
        )
        results = await asyncio.gather(
            *(self._notify(inv.email, content) for inv in invitations)
        )

        return FinalizeResponse(
            meeting=MeetingResponse.model_validate(updated),
            notifications=[
                NotificationResult(email=inv.email, sent=sent)
                for inv, sent in zip(invitations, results)
            ],
        )

    async def invite_participants(
        self, meeting_id: UUID, data: InviteParticipantsRequest
    ) -> InviteParticipantsResponse:
        """참여자 추가/재초대 (owner 전용, 기존 초대는 새 토큰으로 교체)"""
        meeting = await self._get_meeting_or_raise(meeting_id)
        owner = await self._require_owner(meeting_id, data.email, data.token)

        if meeting.is_finalized:
            raise ValueError("MEETING_FINALIZED")

        emails = [email for email in split_invitees(data.invitees) if email != owner.email]
        if not emails or any(not is_valid_email(email) for email in emails):
            raise ValueError("INVALID_INVITEE_EMAIL")

        invitations = [
            await self.invitation_repo.create_or_replace(
                meeting_id, email, InvitationRole.INVITEE.value
            )
            for email in emails
        ]
        await self.db.commit()

        for invitation in invitations:
            await self._send_invite(meeting, invitation)

        return InviteParticipantsResponse(
            invites=[InvitationSummary(email=inv.email, role=inv.role) for inv in invitations]
        )

    async def expire_invitation(
        self, meeting_id: UUID, data: ExpireInvitationRequest
    ) -> OkResponse:
        """초대 만료 (owner 전용, owner 자신의 초대는 불가)"""
        await self._get_meeting_or_raise(meeting_id)
        await self._require_owner(meeting_id, data.email, data.token)

        target = await self.invitation_repo.get_by_email(meeting_id, data.target_email)
        if target is None:
            raise ValueError("INVITATION_NOT_FOUND")
        if target.is_owner:
            raise ValueError("CANNOT_EXPIRE_OWNER")

        await self.invitation_repo.expire(target.id)
        logger.info("[Meeting] Invitation expired: meeting=%s email=%s", meeting_id, target.email)
        return OkResponse()

    async def delete_meeting(self, meeting_id: UUID, email: str, token: str) -> None:
        """회의 삭제 (owner 전용, 초대/위치 cascade)"""
        await self._get_meeting_or_raise(meeting_id)
        await self._require_owner(meeting_id, email, token)
        await self.meeting_repo.delete(meeting_id)
        logger.info("[Meeting] Deleted meeting %s", meeting_id)

    async def _get_meeting_or_raise(self, meeting_id: UUID) -> Meeting:
        meeting = await self.meeting_repo.get(meeting_id)
        if not meeting:
            raise ValueError("MEETING_NOT_FOUND")
        return meeting

    async def _require_owner(self, meeting_id: UUID, email: str, token: str) -> Invitation:
        invitation = await self.invitation_repo.validate(meeting_id, email, token)
        if not invitation.is_owner:
            raise ValueError("NOT_OWNER")
        return invitation

    def _midpoint(self, locations) -> MidpointResponse:
        point = compute_geographic_midpoint(
            GeoPoint(lat=loc.lat, lng=loc.lng) for loc in locations
        )
        return MidpointResponse(lat=point.lat, lng=point.lng)

    def _link(self, meeting: Meeting, invitation: Invitation) -> str:
        return meeting_link(
            self.settings.public_base_url, str(meeting.id), invitation.token, invitation.email
        )

    async def _send_invite(self, meeting: Meeting, invitation: Invitation) -> bool:
        content = invite_email(
            meeting.title,
            self._link(meeting, invitation),
            is_owner=invitation.is_owner,
            owner_name=meeting.owner_name,
        )
        sent = await self._notify(invitation.email, content)
        if not sent:
            logger.warning(
                "[Meeting] Invite email not sent: meeting=%s email=%s", meeting.id, invitation.email
            )
        return sent

    async def _notify(self, email: str, content: EmailContent) -> bool:
        """알림 1건 발송 (어떤 실패도 호출자에게 전파하지 않음)"""
        try:
            return await self.notifier.send(email, content.subject, content.html, content.text)
        except Exception as e:
            logger.warning("[Meeting] Notifier error for %s: %s", email, e)
            return False
