"""Meetup Repository (PostgreSQL / SQLAlchemy async)

(meeting, email) 유일성은 DB 제약조건과 INSERT ... ON CONFLICT DO UPDATE로
보장하며, 애플리케이션 수준 락은 사용하지 않는다 (last-write-wins).
"""

import uuid
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import case, delete, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import generate_invite_token
from app.models.invitation import Invitation, InvitationRole, InvitationStatus
from app.models.location import MeetingLocation
from app.models.meeting import Meeting, MeetingStatus
from app.utils.email import normalize_email
from app.utils.geo import is_valid_coordinate

# upsert 후 identity map 갱신
_POPULATE_EXISTING = {"populate_existing": True}


class MeetingRepository:
    """회의 저장소"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        *,
        title: str,
        owner_email: str,
        owner_name: str | None,
        venue_type: str | None,
        radius_meters: int,
    ) -> Meeting:
        meeting = Meeting(
            title=title,
            owner_email=normalize_email(owner_email),
            owner_name=owner_name,
            venue_type=venue_type,
            radius_meters=radius_meters,
            status=MeetingStatus.COLLECTING.value,
        )
        self.db.add(meeting)
        await self.db.flush()
        await self.db.refresh(meeting)
        return meeting

    async def get(self, meeting_id: UUID) -> Meeting | None:
        query = select(Meeting).where(Meeting.id == meeting_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def finalize(self, meeting_id: UUID, place: dict[str, Any]) -> Meeting | None:
        """status='collecting'인 경우에만 확정 (동시 확정 요청 중 하나만 성공)"""
        now = datetime.now(timezone.utc)
        stmt = (
            update(Meeting)
            .where(
                Meeting.id == meeting_id,
                Meeting.status == MeetingStatus.COLLECTING.value,
            )
            .values(
                status=MeetingStatus.FINALIZED.value,
                finalized_place=place,
                finalized_at=now,
                updated_at=now,
            )
            .returning(Meeting)
        )
        result = await self.db.execute(stmt, execution_options=_POPULATE_EXISTING)
        return result.scalar_one_or_none()

    async def delete(self, meeting_id: UUID) -> bool:
        # invitations / meeting_locations는 FK ON DELETE CASCADE
        result = await self.db.execute(delete(Meeting).where(Meeting.id == meeting_id))
        return (result.rowcount or 0) > 0


class InvitationRepository:
    """초대 레지스트리"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_or_replace(
        self, meeting_id: UUID, email: str, role: str
    ) -> Invitation:
        stmt = pg_insert(Invitation).values(
            id=uuid.uuid4(),
            meeting_id=meeting_id,
            email=normalize_email(email),
            token=generate_invite_token(),
            role=role,
            status=InvitationStatus.PENDING.value,
            created_at=datetime.now(timezone.utc),
        )
        # responded_at은 건드리지 않음 (응답 이력 유지)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Invitation.meeting_id, Invitation.email],
            set_={
                "token": stmt.excluded.token,
                "role": stmt.excluded.role,
                "status": stmt.excluded.status,
            },
        ).returning(Invitation)
        result = await self.db.execute(stmt, execution_options=_POPULATE_EXISTING)
        return result.scalar_one()

    async def validate(self, meeting_id: UUID, email: str, token: str) -> Invitation:
        query = select(Invitation).where(
            Invitation.meeting_id == meeting_id,
            Invitation.email == normalize_email(email),
            Invitation.token == token,
        )
        result = await self.db.execute(query)
        invitation = result.scalar_one_or_none()

        if not invitation:
            raise ValueError("INVALID_TOKEN")
        if invitation.status == InvitationStatus.EXPIRED.value:
            raise ValueError("INVITATION_EXPIRED")
        return invitation

    async def mark_responded(self, invitation_id: UUID) -> None:
        stmt = (
            update(Invitation)
            .where(
                Invitation.id == invitation_id,
                Invitation.status == InvitationStatus.PENDING.value,
            )
            .values(
                status=InvitationStatus.ACCEPTED.value,
                responded_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session="fetch")
        )
        await self.db.execute(stmt)

    async def expire(self, invitation_id: UUID) -> None:
        stmt = (
            update(Invitation)
            .where(Invitation.id == invitation_id)
            .values(status=InvitationStatus.EXPIRED.value)
            .execution_options(synchronize_session="fetch")
        )
        await self.db.execute(stmt)

    async def get_by_email(self, meeting_id: UUID, email: str) -> Invitation | None:
        query = select(Invitation).where(
            Invitation.meeting_id == meeting_id,
            Invitation.email == normalize_email(email),
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_by_meeting(self, meeting_id: UUID) -> list[Invitation]:
        owner_first = case((Invitation.role == InvitationRole.OWNER.value, 0), else_=1)
        query = (
            select(Invitation)
            .where(Invitation.meeting_id == meeting_id)
            .order_by(owner_first, Invitation.email.asc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())


class LocationRepository:
    """위치 원장"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def upsert(
        self, meeting_id: UUID, email: str, lat: float, lng: float
    ) -> MeetingLocation:
        if not is_valid_coordinate(lat, lng):
            raise ValueError("INVALID_COORDINATES")

        stmt = pg_insert(MeetingLocation).values(
            id=uuid.uuid4(),
            meeting_id=meeting_id,
            email=normalize_email(email),
            lat=lat,
            lng=lng,
            provided_at=datetime.now(timezone.utc),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[MeetingLocation.meeting_id, MeetingLocation.email],
            set_={
                "lat": stmt.excluded.lat,
                "lng": stmt.excluded.lng,
                "provided_at": stmt.excluded.provided_at,
            },
        ).returning(MeetingLocation)
        result = await self.db.execute(stmt, execution_options=_POPULATE_EXISTING)
        return result.scalar_one()

    async def list_by_meeting(self, meeting_id: UUID) -> list[MeetingLocation]:
        query = (
            select(MeetingLocation)
            .where(MeetingLocation.meeting_id == meeting_id)
            .order_by(MeetingLocation.provided_at.desc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
