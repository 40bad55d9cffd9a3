"""
Tests for domain models.
"""

import pendulum
import pytest

from slotbooker.domain.models import (
    AvailabilityDay,
    BookingResult,
    DateRange,
    EventTypeDescriptor,
    LocationConfiguration,
    Spot,
)


class TestSpot:
    """Tests for the bookability predicate."""

    def test_available_spot_with_capacity_is_bookable(self):
        spot = Spot(start_time="2024-01-01T10:00:00+05:30", status="available", invitees_remaining=1)

        assert spot.is_bookable()

    def test_available_spot_without_capacity_is_not_bookable(self):
        spot = Spot(start_time="2024-01-01T10:00:00+05:30", status="available", invitees_remaining=0)

        assert not spot.is_bookable()

    def test_unavailable_spot_is_not_bookable(self):
        spot = Spot(start_time="2024-01-01T10:00:00+05:30", status="unavailable", invitees_remaining=3)

        assert not spot.is_bookable()

    def test_from_dict_keeps_start_time_verbatim(self):
        spot = Spot.from_dict({
            "status": "available",
            "start_time": "2024-01-01T10:00:00+05:30",
            "invitees_remaining": 2,
        })

        assert spot.start_time == "2024-01-01T10:00:00+05:30"
        assert spot.invitees_remaining == 2
        assert spot.start_datetime().hour == 10


class TestAvailabilityDay:
    """Tests for AvailabilityDay parsing."""

    def test_from_dict_preserves_spot_order(self):
        day = AvailabilityDay.from_dict({
            "date": "2024-01-02",
            "status": "available",
            "spots": [
                {"status": "available", "start_time": "2024-01-02T11:00:00+05:30", "invitees_remaining": 1},
                {"status": "available", "start_time": "2024-01-02T09:00:00+05:30", "invitees_remaining": 1},
            ],
        })

        assert day.is_available()
        assert [spot.start_time for spot in day.spots] == [
            "2024-01-02T11:00:00+05:30",
            "2024-01-02T09:00:00+05:30",
        ]

    def test_missing_spots_become_empty_list(self):
        day = AvailabilityDay.from_dict({"date": "2024-01-02", "status": "unavailable", "spots": None})

        assert day.spots == []
        assert not day.is_available()


class TestEventTypeDescriptor:
    """Tests for event type parsing and location resolution."""

    def test_from_dict(self):
        descriptor = EventTypeDescriptor.from_dict({
            "uuid": "ET-1",
            "name": "30 Minute Meeting",
            "duration": 30,
            "scheduling_link": {"uid": "LINK-1"},
            "location_configurations": [
                {"id": 7, "kind": "physical", "position": 0, "location": "Office", "data": None},
            ],
        })

        assert descriptor.uuid == "ET-1"
        assert descriptor.scheduling_link_uid == "LINK-1"
        assert descriptor.duration_minutes == 30
        assert descriptor.location_configurations == [
            LocationConfiguration(kind="physical", location="Office", data="")
        ]

    def test_missing_uuid_raises_key_error(self):
        with pytest.raises(KeyError):
            EventTypeDescriptor.from_dict({"scheduling_link": {"uid": "LINK-1"}})

    def test_resolve_location_uses_first_entry(self):
        descriptor = EventTypeDescriptor(
            uuid="ET-1",
            scheduling_link_uid="LINK-1",
            location_configurations=[
                LocationConfiguration(kind="zoom_conference"),
                LocationConfiguration(kind="physical", location="Office"),
            ],
        )

        assert descriptor.resolve_location() == LocationConfiguration(kind="zoom_conference")

    def test_resolve_location_defaults_to_video_conference(self):
        descriptor = EventTypeDescriptor.from_dict({
            "uuid": "ET-1",
            "scheduling_link": {"uid": "LINK-1"},
            "location_configurations": [],
        })

        location = descriptor.resolve_location()

        assert location.kind == "google_conference"
        assert location.location is None
        assert location.data == ""


class TestDateRange:
    """Tests for DateRange."""

    def test_start_after_end_raises_error(self):
        with pytest.raises(ValueError, match="must not be after"):
            DateRange(start=pendulum.date(2024, 1, 8), end=pendulum.date(2024, 1, 1))

    def test_single_day_range_is_valid(self):
        date_range = DateRange(start=pendulum.date(2024, 1, 1), end=pendulum.date(2024, 1, 1))

        assert date_range.start_string() == date_range.end_string() == "2024-01-01"


class TestBookingResult:
    """Tests for BookingResult parsing."""

    def test_complete_result(self):
        result = BookingResult.from_dict({
            "uri": "https://calendly.com/api/booking/invitees/INV-1",
            "uuid": "INV-1",
            "event": {
                "uuid": "EV-1",
                "name": "30 Minute Meeting",
                "start_time": "2024-01-01T10:00:00+05:30",
                "end_time": "2024-01-01T10:30:00+05:30",
                "location_type": "google_conference",
            },
            "invitee": {"email": "john.doe@example.com", "full_name": "John Doe", "timezone": "Asia/Calcutta"},
        })

        assert result.is_complete()
        assert result.event.name == "30 Minute Meeting"
        assert result.invitee.timezone == "Asia/Calcutta"

    def test_result_without_uuid_is_incomplete(self):
        result = BookingResult.from_dict({"uri": "https://calendly.com/api/booking/invitees/INV-1"})

        assert not result.is_complete()
        assert result.event.name is None
