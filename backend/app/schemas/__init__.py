from app.schemas.common import ErrorDetail, ErrorResponse
from app.schemas.meeting import (
    CreateMeetingRequest,
    CreateMeetingResponse,
    FinalizeRequest,
    FinalizeResponse,
    MeetingResponse,
    MeetingStatusResponse,
    SubmitLocationRequest,
    SuggestionsResponse,
)
from app.schemas.venue import Venue, VenueLocation

__all__ = [
    "CreateMeetingRequest",
    "CreateMeetingResponse",
    "ErrorDetail",
    "ErrorResponse",
    "FinalizeRequest",
    "FinalizeResponse",
    "MeetingResponse",
    "MeetingStatusResponse",
    "SubmitLocationRequest",
    "SuggestionsResponse",
    "Venue",
    "VenueLocation",
]
