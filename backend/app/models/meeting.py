import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class MeetingStatus(str, Enum):
    """회의 상태 (collecting → finalized 단방향)"""

    COLLECTING = "collecting"
    FINALIZED = "finalized"


class Meeting(Base):
    """회의 모델"""

    __tablename__ = "meetings"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    owner_email: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
    )
    owner_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )
    venue_type: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,  # 장소 카테고리 힌트 (예: coffee, dinner)
    )
    radius_meters: Mapped[int] = mapped_column(
        Integer,
        default=3000,
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=MeetingStatus.COLLECTING.value,
        nullable=False,
    )
    finalized_place: Mapped[dict[str, Any] | None] = mapped_column(
        JSONB,
        nullable=True,  # 확정 후 변경 불가
    )
    finalized_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # 관계
    invitations: Mapped[list["Invitation"]] = relationship(
        "Invitation",
        back_populates="meeting",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    locations: Mapped[list["MeetingLocation"]] = relationship(
        "MeetingLocation",
        back_populates="meeting",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_finalized(self) -> bool:
        return self.status == MeetingStatus.FINALIZED.value

    def __repr__(self) -> str:
        return f"<Meeting {self.title}>"


# 순환 import 방지
from app.models.invitation import Invitation  # noqa: E402
from app.models.location import MeetingLocation  # noqa: E402
