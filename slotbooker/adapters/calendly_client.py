"""
Calendly booking API client for fetching availability and booking slots.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Tuple

import requests
from pendulum import Date

from ..domain.booking import build_booking_request
from ..domain.booking_url import parse_booking_url
from ..domain.date_range import DEFAULT_LOOKAHEAD_DAYS, calculate_date_range
from ..domain.exceptions import BookingError, RemoteLookupError
from ..domain.models import (
    AvailabilityDay,
    BookingPreferences,
    BookingResult,
    DateRange,
    EventTypeDescriptor,
    InviteeIdentity,
    SlotSelection,
)

logger = logging.getLogger(__name__)

# Errors raised while decoding a response body into domain models
_DECODE_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


class EventTypeCache:
    """
    Memo of event-type lookups keyed by (profile slug, event-type slug).

    Only lives for the duration of ``CalendlyClient.event_type_scope()``.
    """

    def __init__(self):
        self._entries: Dict[Tuple[str, str], EventTypeDescriptor] = {}

    def get(self, key: Tuple[str, str]) -> EventTypeDescriptor | None:
        return self._entries.get(key)

    def store(self, key: Tuple[str, str], descriptor: EventTypeDescriptor) -> None:
        self._entries[key] = descriptor

    def __len__(self) -> int:
        return len(self._entries)


class CalendlyClient:
    """
    Client for the internal Calendly booking API.

    Each public operation fetches the event-type metadata it needs on its
    own, so ``list_availability`` and ``book_slot`` share no state beyond the
    slugs parsed from the booking-page URL.
    """

    BASE_URL = "https://calendly.com/api/booking"

    def __init__(
        self,
        booking_url: str,
        *,
        session: requests.Session | None = None,
        base_url: str | None = None,
        lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS,
        preferences: BookingPreferences | None = None,
        timeout: float | None = None
    ):
        """
        Initialize the client.

        Args:
            booking_url: Public booking page, e.g. https://calendly.com/acme/30min
            session: Optional requests session (a new one is created if omitted)
            base_url: Override for the booking API root
            lookahead_days: Number of days searched for availability
            preferences: Invitee timezone and time notation
            timeout: Request timeout in seconds, None waits indefinitely

        Raises:
            MalformedUrlError: If the booking URL cannot be parsed
        """
        page = parse_booking_url(booking_url)
        self.profile_slug = page.profile_slug
        self.event_type_slug = page.event_type_slug

        self.session = session or requests.Session()
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.lookahead_days = lookahead_days
        self.preferences = preferences or BookingPreferences()
        self.timeout = timeout
        self._event_type_cache: EventTypeCache | None = None

    @contextmanager
    def event_type_scope(self) -> Iterator[EventTypeCache]:
        """
        Reuse one event-type lookup across the operations inside the block.

        Outside of this block every operation performs its own lookup.
        """
        cache = EventTypeCache()
        self._event_type_cache = cache
        try:
            yield cache
        finally:
            self._event_type_cache = None

    def fetch_event_type_details(self) -> EventTypeDescriptor:
        """
        Look up the event type behind the booking page.

        Returns:
            EventTypeDescriptor for the page's event type

        Raises:
            RemoteLookupError: If the lookup fails or the response is unusable
        """
        key = (self.profile_slug, self.event_type_slug)
        if self._event_type_cache is not None:
            cached = self._event_type_cache.get(key)
            if cached is not None:
                logger.debug("Reusing event type %s/%s", *key)
                return cached

        try:
            data = self._request(
                "GET",
                "/event_types/lookup",
                params={
                    "event_type_slug": self.event_type_slug,
                    "profile_slug": self.profile_slug,
                },
            )
            descriptor = EventTypeDescriptor.from_dict(data)
        except (requests.exceptions.RequestException, *_DECODE_ERRORS) as e:
            raise RemoteLookupError(
                f"Failed to look up event type {self.profile_slug}/{self.event_type_slug}: {e}"
            ) from e

        if self._event_type_cache is not None:
            self._event_type_cache.store(key, descriptor)

        return descriptor

    def list_availability(self, today: Date | None = None) -> List[AvailabilityDay]:
        """
        Fetch the availability calendar for the lookahead window.

        Args:
            today: First day of the window, defaults to today in the
                configured timezone

        Returns:
            Availability days in the order the service returned them

        Raises:
            RemoteLookupError: If any remote step fails
        """
        try:
            event_type = self.fetch_event_type_details()
            date_range = calculate_date_range(
                self.lookahead_days,
                timezone=self.preferences.timezone,
                today=today
            )
            return self._fetch_availability(event_type, date_range)
        except (RemoteLookupError, requests.exceptions.RequestException, *_DECODE_ERRORS) as e:
            logger.error("Error fetching Calendly events: %s", e)
            raise RemoteLookupError("Failed to fetch available events from Calendly") from e

    def book_slot(self, selection: SlotSelection, invitee: InviteeIdentity) -> BookingResult:
        """
        Book the selected slot for ``invitee``.

        No retry is attempted and no idempotency key is sent: a timeout after
        the service accepted the booking surfaces as a failure.

        Raises:
            BookingError: If any remote step fails
        """
        try:
            event_type = self.fetch_event_type_details()
            request = build_booking_request(
                selection,
                invitee,
                event_type,
                location=event_type.resolve_location(),
                preferences=self.preferences
            )
            data = self._request("POST", "/invitees", json=request.to_payload())
            return BookingResult.from_dict(data)
        except (RemoteLookupError, requests.exceptions.RequestException, *_DECODE_ERRORS) as e:
            logger.error("Error booking Calendly event: %s", e)
            raise BookingError("Failed to book event with Calendly") from e

    def _fetch_availability(
        self,
        event_type: EventTypeDescriptor,
        date_range: DateRange
    ) -> List[AvailabilityDay]:
        """
        Fetch and parse the calendar range for an event type.

        Response format:
        {
            "days": [
                {
                    "date": "2024-01-01",
                    "status": "available",
                    "spots": [
                        {
                            "status": "available",
                            "start_time": "2024-01-01T10:00:00+05:30",
                            "invitees_remaining": 1
                        }
                    ]
                }
            ]
        }
        """
        data = self._request(
            "GET",
            f"/event_types/{event_type.uuid}/calendar/range",
            params={
                "timezone": self.preferences.timezone,
                "diagnostics": "false",
                "range_start": date_range.start_string(),
                "range_end": date_range.end_string(),
                "scheduling_link_uuid": event_type.scheduling_link_uid,
            },
        )

        return [AvailabilityDay.from_dict(day) for day in data["days"]]

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        """Send a request to the booking API and decode the JSON body."""
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)

        response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        response.raise_for_status()
        return response.json()
