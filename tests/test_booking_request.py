"""
Tests for date range calculation and booking request construction.
"""

import json

import pendulum
import pytest

from slotbooker.domain.booking import build_booking_request
from slotbooker.domain.date_range import calculate_date_range
from slotbooker.domain.models import (
    BookingPreferences,
    EventTypeDescriptor,
    InviteeIdentity,
    LocationConfiguration,
    SlotSelection,
)

EVENT_TYPE = EventTypeDescriptor(
    uuid="ET-1",
    scheduling_link_uid="LINK-1",
    location_configurations=[],
)
INVITEE = InviteeIdentity(full_name="John Doe", email="john.doe@example.com")
SELECTION = SlotSelection(start_time="2024-01-01T10:00:00+05:30", day="2024-01-01")


class TestCalculateDateRange:
    """Tests for calculate_date_range."""

    def test_seven_day_window_is_zero_padded(self):
        date_range = calculate_date_range(7, today=pendulum.date(2024, 3, 1))

        assert date_range.start_string() == "2024-03-01"
        assert date_range.end_string() == "2024-03-08"

    def test_window_crosses_month_and_year(self):
        date_range = calculate_date_range(7, today=pendulum.date(2024, 12, 28))

        assert date_range.start_string() == "2024-12-28"
        assert date_range.end_string() == "2025-01-04"

    def test_defaults_to_today_in_timezone(self):
        date_range = calculate_date_range(7, timezone="Asia/Calcutta")

        assert date_range.end == date_range.start.add(days=7)

    @pytest.mark.parametrize("days_ahead", [0, -1])
    def test_non_positive_lookahead_raises(self, days_ahead):
        with pytest.raises(ValueError, match="greater than zero"):
            calculate_date_range(days_ahead, today=pendulum.date(2024, 3, 1))


class TestBuildBookingRequest:
    """Tests for build_booking_request."""

    def test_payload_shape(self):
        request = build_booking_request(SELECTION, INVITEE, EVENT_TYPE)

        assert request.to_payload() == {
            "event": {
                "start_time": "2024-01-01T10:00:00+05:30",
                "location_configuration": {
                    "kind": "google_conference",
                    "location": None,
                    "data": "",
                },
                "guests": [],
            },
            "invitee": {
                "timezone": "Asia/Calcutta",
                "time_notation": "12h",
                "full_name": "John Doe",
                "email": "john.doe@example.com",
            },
            "scheduling_link_uuid": "LINK-1",
            "event_type_uuid": "ET-1",
        }

    def test_same_inputs_give_identical_payload(self):
        first = build_booking_request(SELECTION, INVITEE, EVENT_TYPE).to_payload()
        second = build_booking_request(SELECTION, INVITEE, EVENT_TYPE).to_payload()

        assert json.dumps(first) == json.dumps(second)

    def test_explicit_location_and_preferences(self):
        location = LocationConfiguration(kind="physical", location="Office", data="Room 4")
        preferences = BookingPreferences(timezone="Europe/Berlin", time_notation="24h")

        payload = build_booking_request(
            SELECTION,
            INVITEE,
            EVENT_TYPE,
            location=location,
            preferences=preferences
        ).to_payload()

        assert payload["event"]["location_configuration"] == {
            "kind": "physical",
            "location": "Office",
            "data": "Room 4",
        }
        assert payload["invitee"]["timezone"] == "Europe/Berlin"
        assert payload["invitee"]["time_notation"] == "24h"
        assert payload["event"]["guests"] == []
