"""
Application service that finds the first open slot and books it.

The service runs one list-then-book cycle against a scheduling client and
delegates slot selection to the domain-level ``SlotSelector``. Remote
failures are turned into a ``BookingRunReport`` instead of propagating, so
callers (the CLI) only have to render the outcome.
"""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Protocol

from pendulum import Date

from ..domain.exceptions import BookingError, RemoteLookupError
from ..domain.models import (
    AvailabilityDay,
    BookingResult,
    InviteeIdentity,
    SlotSelection,
)
from ..domain.slot_selector import SelectionStatus, SlotSelector

logger = logging.getLogger(__name__)


class SchedulingClientProtocol(Protocol):
    """Protocol describing the scheduling client behaviour needed by the service."""

    def list_availability(self, today: Optional[Date] = None) -> List[AvailabilityDay]:
        """Return availability days for the lookahead window."""

    def book_slot(self, selection: SlotSelection, invitee: InviteeIdentity) -> BookingResult:
        """Book the selected slot."""

    def event_type_scope(self) -> AbstractContextManager[Any]:
        """Share one event-type lookup across the calls made inside the block."""


class RunStatus(str, Enum):
    BOOKED = "booked"
    INCOMPLETE = "incomplete"
    SLOT_FOUND = "slot_found"
    NO_SLOTS = "no_slots"
    NO_BOOKABLE_SPOT = "no_bookable_spot"
    AVAILABILITY_FAILED = "availability_failed"
    BOOKING_FAILED = "booking_failed"


@dataclass
class BookingRunReport:
    """
    Outcome of one booking run.

    ``selection`` is kept even when the booking itself failed.
    """
    status: RunStatus
    selection: Optional[SlotSelection] = None
    result: Optional[BookingResult] = None
    error_message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status in (RunStatus.BOOKED, RunStatus.SLOT_FOUND)


class SlotBookerService:
    """
    Orchestrates availability lookup, slot selection and booking.

    Depends on a protocol so the real Calendly adapter, the mock client or a
    test stub can be plugged in.
    """

    def __init__(
        self,
        client: SchedulingClientProtocol,
        invitee: InviteeIdentity,
        slot_selector: SlotSelector | None = None,
        reuse_event_type: bool = False,
    ) -> None:
        self._client = client
        self._invitee = invitee
        self._slot_selector = slot_selector or SlotSelector()
        self._reuse_event_type = reuse_event_type

    def run(self, *, book: bool = True, today: Optional[Date] = None) -> BookingRunReport:
        """
        Find the first bookable slot and, unless ``book`` is False, book it.
        """
        scope = self._client.event_type_scope() if self._reuse_event_type else nullcontext()

        with scope:
            try:
                days = self._client.list_availability(today=today)
            except RemoteLookupError as e:
                logger.info("Availability lookup failed: %s", e)
                return BookingRunReport(
                    status=RunStatus.AVAILABILITY_FAILED,
                    error_message=str(e),
                )
            except Exception as e:
                logger.exception("Unexpected error while listing availability")
                return BookingRunReport(
                    status=RunStatus.AVAILABILITY_FAILED,
                    error_message=str(e) or type(e).__name__,
                )

            outcome = self._slot_selector.select(days)

            if outcome.status is SelectionStatus.NO_SLOTS:
                logger.info("No available time slots found")
                return BookingRunReport(status=RunStatus.NO_SLOTS)

            if outcome.status is SelectionStatus.NO_BOOKABLE_SPOT:
                logger.info("No available spots found")
                return BookingRunReport(status=RunStatus.NO_BOOKABLE_SPOT)

            selection = outcome.to_selection()
            logger.info(
                "Found available slot on %s at %s", selection.day, selection.start_time
            )

            if not book:
                return BookingRunReport(status=RunStatus.SLOT_FOUND, selection=selection)

            return self._book(selection)

    def _book(self, selection: SlotSelection) -> BookingRunReport:
        logger.info("Attempting to book slot at %s", selection.start_time)

        try:
            result = self._client.book_slot(selection, self._invitee)
        except BookingError as e:
            logger.info("Booking failed: %s", e)
            return BookingRunReport(
                status=RunStatus.BOOKING_FAILED,
                selection=selection,
                error_message=str(e),
            )
        except Exception as e:
            logger.exception("Unexpected error while booking %s", selection.start_time)
            return BookingRunReport(
                status=RunStatus.BOOKING_FAILED,
                selection=selection,
                error_message=str(e) or type(e).__name__,
            )

        if not result.is_complete():
            logger.warning("Booking process completed but response is incomplete")
            return BookingRunReport(
                status=RunStatus.INCOMPLETE,
                selection=selection,
                result=result,
            )

        logger.info("Booking successful: %s", result.uri)
        return BookingRunReport(status=RunStatus.BOOKED, selection=selection, result=result)
