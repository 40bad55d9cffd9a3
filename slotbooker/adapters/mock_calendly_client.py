"""
Mock Calendly client for trying the booking flow without network access.
"""

import json
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List

import pendulum
from pendulum import Date

from ..domain.booking import build_booking_request
from ..domain.models import (
    AvailabilityDay,
    BookingPreferences,
    BookingRequest,
    BookingResult,
    EventTypeDescriptor,
    InviteeIdentity,
    SlotSelection,
)


class MockCalendlyClient:
    """
    Mock client that serves availability from mock_calendly_data.json.

    Bookings are never sent anywhere; a confirmation is fabricated from the
    request and the request is kept in ``bookings`` for inspection.
    """

    def __init__(
        self,
        booking_url: str = "https://calendly.com/mock/30min",
        preferences: BookingPreferences | None = None,
        data_file: Path | None = None
    ):
        """
        Initialize the mock client.

        Args:
            booking_url: Ignored, kept for interface compatibility
            preferences: Invitee timezone and time notation
            data_file: Alternative JSON fixture
        """
        self.booking_url = booking_url
        self.preferences = preferences or BookingPreferences()
        self.bookings: List[BookingRequest] = []
        self._load_mock_data(data_file or Path(__file__).parent / "mock_calendly_data.json")

    def _load_mock_data(self, data_file: Path) -> None:
        """Load mock event type and availability from JSON file."""
        with open(data_file, "r", encoding="utf-8") as f:
            data: Dict[str, Any] = json.load(f)

        self.event_type_data = data["event_type"]
        self.days_data = data.get("days", [])

    @contextmanager
    def event_type_scope(self) -> Iterator[None]:
        yield None

    def fetch_event_type_details(self) -> EventTypeDescriptor:
        return EventTypeDescriptor.from_dict(self.event_type_data)

    def list_availability(self, today: Date | None = None) -> List[AvailabilityDay]:
        return [AvailabilityDay.from_dict(day) for day in self.days_data]

    def book_slot(self, selection: SlotSelection, invitee: InviteeIdentity) -> BookingResult:
        """
        Pretend to book the slot.

        Returns:
            Confirmation shaped like the real service's response
        """
        event_type = self.fetch_event_type_details()
        request = build_booking_request(
            selection,
            invitee,
            event_type,
            preferences=self.preferences
        )
        self.bookings.append(request)

        start = pendulum.parse(selection.start_time)
        end = start.add(minutes=event_type.duration_minutes or 30)
        invitee_uuid = str(uuid.uuid4())

        return BookingResult.from_dict({
            "uri": f"https://calendly.com/api/booking/invitees/{invitee_uuid}",
            "uuid": invitee_uuid,
            "event": {
                "uuid": str(uuid.uuid4()),
                "name": event_type.name,
                "start_time": selection.start_time,
                "end_time": end.to_iso8601_string(),
                "location_type": request.location.kind,
            },
            "invitee": {
                "email": invitee.email,
                "full_name": invitee.full_name,
                "timezone": self.preferences.timezone,
            },
        })
