"""
Domain-specific exception hierarchy for the slot booker application.
"""


class SlotBookerError(Exception):
    """Base class for all application-level errors."""


class MalformedUrlError(SlotBookerError, ValueError):
    """Raised when a booking-page URL cannot be split into profile and event type."""


class RemoteLookupError(SlotBookerError):
    """Raised when event-type or availability data cannot be fetched or parsed."""


class BookingError(SlotBookerError):
    """Raised when the booking request is rejected or cannot be submitted."""
