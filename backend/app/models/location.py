import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class MeetingLocation(Base):
    """참여자 위치 모델 (meeting, email) 당 1건, 재제출 시 덮어쓰기"""

    __tablename__ = "meeting_locations"
    __table_args__ = (
        UniqueConstraint("meeting_id", "email", name="uq_meeting_locations_meeting_email"),
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
        nullable=False,
    )
    lat: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )
    lng: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )
    provided_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # 관계
    meeting: Mapped["Meeting"] = relationship("Meeting", back_populates="locations")

    def __repr__(self) -> str:
        return f"<MeetingLocation {self.email} ({self.lat}, {self.lng})>"


# 순환 import 방지
from app.models.meeting import Meeting  # noqa: E402
