"""Meetup Repository 패키지

회의 / 초대 레지스트리 / 위치 원장 저장소.
"""

from app.repositories.meetup.interface import (
    IInvitationRepository,
    ILocationRepository,
    IMeetingRepository,
)
from app.repositories.meetup.mock_repository import (
    MockInvitationRepository,
    MockLocationRepository,
    MockMeetingRepository,
    MockMeetupStore,
)
from app.repositories.meetup.repository import (
    InvitationRepository,
    LocationRepository,
    MeetingRepository,
)

__all__ = [
    "IInvitationRepository",
    "ILocationRepository",
    "IMeetingRepository",
    "InvitationRepository",
    "LocationRepository",
    "MeetingRepository",
    "MockInvitationRepository",
    "MockLocationRepository",
    "MockMeetingRepository",
    "MockMeetupStore",
]
