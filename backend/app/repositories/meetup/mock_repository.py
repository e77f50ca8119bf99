"""Mock Meetup Repository

테스트용 인메모리 저장소. SQL 구현체와 같은 유일성/upsert 의미를 따른다.
세 저장소가 하나의 MockMeetupStore를 공유해 cascade 삭제를 흉내낸다.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from app.core.security import generate_invite_token, tokens_match
from app.models.invitation import Invitation, InvitationRole, InvitationStatus
from app.models.location import MeetingLocation
from app.models.meeting import Meeting, MeetingStatus
from app.utils.email import normalize_email
from app.utils.geo import is_valid_coordinate


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class MockMeetupStore:
    """인메모리 테이블 (meetings / invitations / meeting_locations)"""

    meetings: dict[UUID, Meeting] = field(default_factory=dict)
    # (meeting_id, email) → row
    invitations: dict[tuple[UUID, str], Invitation] = field(default_factory=dict)
    locations: dict[tuple[UUID, str], MeetingLocation] = field(default_factory=dict)


class MockMeetingRepository:
    """테스트용 Mock 회의 저장소"""

    def __init__(self, store: MockMeetupStore):
        self.store = store

    async def create(
        self,
        *,
        title: str,
        owner_email: str,
        owner_name: str | None,
        venue_type: str | None,
        radius_meters: int,
    ) -> Meeting:
        now = _now()
        meeting = Meeting(
            id=uuid.uuid4(),
            title=title,
            owner_email=normalize_email(owner_email),
            owner_name=owner_name,
            venue_type=venue_type,
            radius_meters=radius_meters,
            status=MeetingStatus.COLLECTING.value,
            finalized_place=None,
            finalized_at=None,
            created_at=now,
            updated_at=now,
        )
        self.store.meetings[meeting.id] = meeting
        return meeting

    async def get(self, meeting_id: UUID) -> Meeting | None:
        return self.store.meetings.get(meeting_id)

    async def finalize(self, meeting_id: UUID, place: dict[str, Any]) -> Meeting | None:
        meeting = self.store.meetings.get(meeting_id)
        if meeting is None or meeting.status != MeetingStatus.COLLECTING.value:
            return None
        now = _now()
        meeting.status = MeetingStatus.FINALIZED.value
        meeting.finalized_place = place
        meeting.finalized_at = now
        meeting.updated_at = now
        return meeting

    async def delete(self, meeting_id: UUID) -> bool:
        if self.store.meetings.pop(meeting_id, None) is None:
            return False
        for key in [k for k in self.store.invitations if k[0] == meeting_id]:
            del self.store.invitations[key]
        for key in [k for k in self.store.locations if k[0] == meeting_id]:
            del self.store.locations[key]
        return True


class MockInvitationRepository:
    """테스트용 Mock 초대 레지스트리"""

    def __init__(self, store: MockMeetupStore):
        self.store = store

    async def create_or_replace(
        self, meeting_id: UUID, email: str, role: str
    ) -> Invitation:
        key = (meeting_id, normalize_email(email))
        token = generate_invite_token()
        existing = self.store.invitations.get(key)
        if existing is not None:
            existing.token = token
            existing.role = role
            existing.status = InvitationStatus.PENDING.value
            return existing

        invitation = Invitation(
            id=uuid.uuid4(),
            meeting_id=meeting_id,
            email=key[1],
            token=token,
            role=role,
            status=InvitationStatus.PENDING.value,
            responded_at=None,
            created_at=_now(),
        )
        self.store.invitations[key] = invitation
        return invitation

    async def validate(self, meeting_id: UUID, email: str, token: str) -> Invitation:
        invitation = self.store.invitations.get((meeting_id, normalize_email(email)))
        if invitation is None or not tokens_match(invitation.token, token):
            raise ValueError("INVALID_TOKEN")
        if invitation.status == InvitationStatus.EXPIRED.value:
            raise ValueError("INVITATION_EXPIRED")
        return invitation

    async def mark_responded(self, invitation_id: UUID) -> None:
        invitation = self._find(invitation_id)
        if invitation is not None and invitation.status == InvitationStatus.PENDING.value:
            invitation.status = InvitationStatus.ACCEPTED.value
            invitation.responded_at = _now()

    async def expire(self, invitation_id: UUID) -> None:
        invitation = self._find(invitation_id)
        if invitation is not None:
            invitation.status = InvitationStatus.EXPIRED.value

    async def get_by_email(self, meeting_id: UUID, email: str) -> Invitation | None:
        return self.store.invitations.get((meeting_id, normalize_email(email)))

    async def list_by_meeting(self, meeting_id: UUID) -> list[Invitation]:
        rows = [inv for (mid, _), inv in self.store.invitations.items() if mid == meeting_id]
        return sorted(
            rows,
            key=lambda inv: (inv.role != InvitationRole.OWNER.value, inv.email),
        )

    def _find(self, invitation_id: UUID) -> Invitation | None:
        for invitation in self.store.invitations.values():
            if invitation.id == invitation_id:
                return invitation
        return None


class MockLocationRepository:
    """테스트용 Mock 위치 원장"""

    def __init__(self, store: MockMeetupStore):
        self.store = store

    async def upsert(
        self, meeting_id: UUID, email: str, lat: float, lng: float
    ) -> MeetingLocation:
        if not is_valid_coordinate(lat, lng):
            raise ValueError("INVALID_COORDINATES")

        key = (meeting_id, normalize_email(email))
        location = self.store.locations.get(key)
        if location is None:
            location = MeetingLocation(id=uuid.uuid4(), meeting_id=meeting_id, email=key[1])
            self.store.locations[key] = location
        location.lat = lat
        location.lng = lng
        location.provided_at = _now()
        return location

    async def list_by_meeting(self, meeting_id: UUID) -> list[MeetingLocation]:
        rows = [loc for (mid, _), loc in self.store.locations.items() if mid == meeting_id]
        return sorted(rows, key=lambda loc: loc.provided_at, reverse=True)
