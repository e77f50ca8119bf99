from app.models.invitation import Invitation, InvitationRole, InvitationStatus
from app.models.location import MeetingLocation
from app.models.meeting import Meeting, MeetingStatus

__all__ = [
    "Meeting",
    "MeetingStatus",
    "Invitation",
    "InvitationRole",
    "InvitationStatus",
    "MeetingLocation",
]
