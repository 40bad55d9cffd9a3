"""
Construction of booking requests from a selected slot.
"""

from .models import (
    BookingPreferences,
    BookingRequest,
    EventTypeDescriptor,
    InviteeIdentity,
    LocationConfiguration,
    SlotSelection,
)


def build_booking_request(
    selection: SlotSelection,
    invitee: InviteeIdentity,
    event_type: EventTypeDescriptor,
    location: LocationConfiguration | None = None,
    preferences: BookingPreferences | None = None
) -> BookingRequest:
    """
    Build the request for booking ``selection`` on behalf of ``invitee``.

    Pure: the same inputs always give an equal request. The guest list is
    always empty.
    """
    return BookingRequest(
        start_time=selection.start_time,
        location=location or event_type.resolve_location(),
        invitee=invitee,
        preferences=preferences or BookingPreferences(),
        scheduling_link_uuid=event_type.scheduling_link_uid,
        event_type_uuid=event_type.uuid,
        guests=[],
    )
