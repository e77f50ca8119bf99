"""Repository 패키지

Repository 패턴 구현체들을 모아둔 패키지.
"""

from app.repositories.meetup import (
    IInvitationRepository,
    ILocationRepository,
    IMeetingRepository,
    InvitationRepository,
    LocationRepository,
    MeetingRepository,
    MockInvitationRepository,
    MockLocationRepository,
    MockMeetingRepository,
    MockMeetupStore,
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
