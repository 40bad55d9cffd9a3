"""
Domain models for event types, availability and bookings.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pendulum
from pendulum import Date, DateTime

AVAILABLE = "available"


@dataclass(frozen=True)
class LocationConfiguration:
    """
    Describes where a booked event takes place.
    """
    kind: str
    location: Optional[str] = None
    data: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LocationConfiguration":
        return cls(
            kind=data["kind"],
            location=data.get("location"),
            data=data.get("data") or "",
        )


DEFAULT_LOCATION = LocationConfiguration(kind="google_conference", location=None, data="")


@dataclass(frozen=True)
class EventTypeDescriptor:
    """
    Event-type metadata returned by the lookup endpoint.
    """
    uuid: str
    scheduling_link_uid: str
    location_configurations: List[LocationConfiguration] = field(default_factory=list)
    name: Optional[str] = None
    duration_minutes: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventTypeDescriptor":
        """
        Build a descriptor from the lookup response.

        Raises:
            KeyError: If ``uuid`` or ``scheduling_link.uid`` is missing
        """
        locations = data.get("location_configurations") or []
        return cls(
            uuid=data["uuid"],
            scheduling_link_uid=data["scheduling_link"]["uid"],
            location_configurations=[
                LocationConfiguration.from_dict(item) for item in locations
            ],
            name=data.get("name"),
            duration_minutes=data.get("duration"),
        )

    def resolve_location(self) -> LocationConfiguration:
        """Return the first location configuration, or the video-conference default."""
        if self.location_configurations:
            return self.location_configurations[0]
        return DEFAULT_LOCATION


@dataclass(frozen=True)
class DateRange:
    """
    Calendar date range searched for availability.

    Invariant: start must not be after end.
    """
    start: Date
    end: Date

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Start date {self.start} must not be after end date {self.end}")

    def start_string(self) -> str:
        return self.start.format("YYYY-MM-DD")

    def end_string(self) -> str:
        return self.end.format("YYYY-MM-DD")


@dataclass(frozen=True)
class Spot:
    """
    A single time offering within a day.

    ``start_time`` is kept exactly as the service sent it so it can be
    echoed back in the booking request.
    """
    start_time: str
    status: str
    invitees_remaining: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Spot":
        return cls(
            start_time=data["start_time"],
            status=data.get("status", ""),
            invitees_remaining=int(data.get("invitees_remaining") or 0),
        )

    def is_bookable(self) -> bool:
        """A spot is bookable when it is available and still has capacity."""
        return self.status == AVAILABLE and self.invitees_remaining > 0

    def start_datetime(self) -> DateTime:
        return pendulum.parse(self.start_time)


@dataclass(frozen=True)
class AvailabilityDay:
    """
    One calendar day's availability.
    """
    date: str
    status: str
    spots: List[Spot] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AvailabilityDay":
        return cls(
            date=data["date"],
            status=data.get("status", ""),
            spots=[Spot.from_dict(item) for item in data.get("spots") or []],
        )

    def is_available(self) -> bool:
        return self.status == AVAILABLE


@dataclass(frozen=True)
class SlotSelection:
    """The spot chosen for booking and the day it was found on."""
    start_time: str
    day: Optional[str] = None


@dataclass(frozen=True)
class InviteeIdentity:
    """Who the booking is made for."""
    full_name: str
    email: str


@dataclass(frozen=True)
class BookingPreferences:
    """Invitee display preferences sent with every booking."""
    timezone: str = "Asia/Calcutta"
    time_notation: str = "12h"


@dataclass(frozen=True)
class BookingRequest:
    """
    Payload for the invitee creation endpoint.
    """
    start_time: str
    location: LocationConfiguration
    invitee: InviteeIdentity
    preferences: BookingPreferences
    scheduling_link_uuid: str
    event_type_uuid: str
    guests: List[str] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """Render the request in the wire format expected by the service."""
        return {
            "event": {
                "start_time": self.start_time,
                "location_configuration": {
                    "kind": self.location.kind,
                    "location": self.location.location,
                    "data": self.location.data,
                },
                "guests": list(self.guests),
            },
            "invitee": {
                "timezone": self.preferences.timezone,
                "time_notation": self.preferences.time_notation,
                "full_name": self.invitee.full_name,
                "email": self.invitee.email,
            },
            "scheduling_link_uuid": self.scheduling_link_uuid,
            "event_type_uuid": self.event_type_uuid,
        }


@dataclass(frozen=True)
class BookedEvent:
    uuid: Optional[str] = None
    name: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location_type: Optional[str] = None


@dataclass(frozen=True)
class BookedInvitee:
    email: Optional[str] = None
    full_name: Optional[str] = None
    timezone: Optional[str] = None


@dataclass(frozen=True)
class BookingResult:
    """
    Confirmation returned by the service after a booking.

    Parsed leniently; use ``is_complete`` to check that the confirmation
    actually identifies a booking.
    """
    uri: Optional[str]
    uuid: Optional[str]
    event: BookedEvent = field(default_factory=BookedEvent)
    invitee: BookedInvitee = field(default_factory=BookedInvitee)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BookingResult":
        event = data.get("event") or {}
        invitee = data.get("invitee") or {}
        return cls(
            uri=data.get("uri"),
            uuid=data.get("uuid"),
            event=BookedEvent(
                uuid=event.get("uuid"),
                name=event.get("name"),
                start_time=event.get("start_time"),
                end_time=event.get("end_time"),
                location_type=event.get("location_type"),
            ),
            invitee=BookedInvitee(
                email=invitee.get("email"),
                full_name=invitee.get("full_name"),
                timezone=invitee.get("timezone"),
            ),
        )

    def is_complete(self) -> bool:
        return bool(self.uri and self.uuid)
