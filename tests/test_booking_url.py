"""
Tests for booking-page URL parsing.
"""

import pytest

from slotbooker.domain.booking_url import BookingPageRef, parse_booking_url
from slotbooker.domain.exceptions import MalformedUrlError


class TestParseBookingUrl:
    """Tests for parse_booking_url."""

    def test_profile_and_event_type(self):
        ref = parse_booking_url("https://calendly.com/codingtalks123/30min")

        assert ref == BookingPageRef(profile_slug="codingtalks123", event_type_slug="30min")

    def test_trailing_slash_and_query_are_ignored(self):
        ref = parse_booking_url("https://calendly.com/acme/intro-call/?month=2024-01")

        assert ref.profile_slug == "acme"
        assert ref.event_type_slug == "intro-call"

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "calendly.com/acme/30min",
            "ftp://calendly.com/acme/30min",
            "https://calendly.com/acme",
            "https://calendly.com/",
        ],
    )
    def test_malformed_url_raises(self, url):
        with pytest.raises(MalformedUrlError):
            parse_booking_url(url)

    def test_malformed_url_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_booking_url("not a url")
