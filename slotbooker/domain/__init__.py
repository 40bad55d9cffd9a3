"""
Domain layer - Pure business logic without external dependencies.
"""

from .booking import build_booking_request
from .booking_url import BookingPageRef, parse_booking_url
from .date_range import calculate_date_range
from .exceptions import BookingError, MalformedUrlError, RemoteLookupError, SlotBookerError
from .models import (
    AvailabilityDay,
    BookingPreferences,
    BookingRequest,
    BookingResult,
    DateRange,
    EventTypeDescriptor,
    InviteeIdentity,
    LocationConfiguration,
    SlotSelection,
    Spot,
)
from .slot_selector import SelectionOutcome, SelectionStatus, SlotSelector

__all__ = [
    "AvailabilityDay",
    "BookingError",
    "BookingPageRef",
    "BookingPreferences",
    "BookingRequest",
    "BookingResult",
    "DateRange",
    "EventTypeDescriptor",
    "InviteeIdentity",
    "LocationConfiguration",
    "MalformedUrlError",
    "RemoteLookupError",
    "SelectionOutcome",
    "SelectionStatus",
    "SlotBookerError",
    "SlotSelection",
    "SlotSelector",
    "Spot",
    "build_booking_request",
    "calculate_date_range",
    "parse_booking_url",
]
