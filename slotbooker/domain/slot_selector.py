"""
Selection of the first bookable slot from an availability listing.

Pure domain logic: no API calls, no I/O.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .models import AvailabilityDay, SlotSelection, Spot


class SelectionStatus(str, Enum):
    FOUND = "found"
    NO_SLOTS = "no_slots"
    NO_BOOKABLE_SPOT = "no_bookable_spot"


@dataclass(frozen=True)
class SelectionOutcome:
    status: SelectionStatus
    day: Optional[AvailabilityDay] = None
    spot: Optional[Spot] = None

    @property
    def found(self) -> bool:
        return self.status is SelectionStatus.FOUND

    def to_selection(self) -> SlotSelection:
        if not self.found:
            raise ValueError(f"No slot was selected ({self.status.value})")
        return SlotSelection(start_time=self.spot.start_time, day=self.day.date)


class SlotSelector:
    """
    Picks the first bookable spot from a list of availability days.

    Algorithm:
    1. If there are no days, or the first day has no spots, stop with NO_SLOTS
    2. Walk the days in order, skipping days whose status is not available
    3. Within a day, walk the spots in order and take the first bookable one
    4. If nothing qualifies, stop with NO_BOOKABLE_SPOT

    Step 1 only looks at the first day. A listing whose first day is empty
    is reported as having no slots even when later days have open spots.
    """

    def select(self, days: Sequence[AvailabilityDay]) -> SelectionOutcome:
        if not days or not days[0].spots:
            return SelectionOutcome(status=SelectionStatus.NO_SLOTS)

        for day in days:
            if not day.is_available():
                continue

            for spot in day.spots:
                if spot.is_bookable():
                    return SelectionOutcome(
                        status=SelectionStatus.FOUND,
                        day=day,
                        spot=spot
                    )

        return SelectionOutcome(status=SelectionStatus.NO_BOOKABLE_SPOT)


def select_first_bookable_slot(days: Sequence[AvailabilityDay]) -> SelectionOutcome:
    """Shortcut for ``SlotSelector().select(days)``."""
    return SlotSelector().select(days)
