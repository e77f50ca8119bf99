import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class InvitationRole(str, Enum):
    """초대 역할 (회의당 owner는 정확히 1명)"""

    OWNER = "owner"
    INVITEE = "invitee"


class InvitationStatus(str, Enum):
    """초대 상태"""

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"


class Invitation(Base):
    """회의 초대 모델 (meeting, email) 당 1건"""

    __tablename__ = "invitations"
    __table_args__ = (
        UniqueConstraint("meeting_id", "email", name="uq_invitations_meeting_email"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    meeting_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("meetings.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,  # 소문자로 정규화
    )
    token: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
    )
    role: Mapped[str] = mapped_column(
        String(20),
        default=InvitationRole.INVITEE.value,
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=InvitationStatus.PENDING.value,
        nullable=False,
    )
    responded_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # 관계
    meeting: Mapped["Meeting"] = relationship("Meeting", back_populates="invitations")

    @property
    def is_owner(self) -> bool:
        return self.role == InvitationRole.OWNER.value

    def __repr__(self) -> str:
        return f"<Invitation {self.email} ({self.role}) in {self.meeting_id}>"


# 순환 import 방지
from app.models.meeting import Meeting  # noqa: E402
