"""
Lookahead window arithmetic.
"""

import pendulum
from pendulum import Date

from .models import DateRange

DEFAULT_LOOKAHEAD_DAYS = 7


def calculate_date_range(
    days_ahead: int = DEFAULT_LOOKAHEAD_DAYS,
    timezone: str = "Asia/Calcutta",
    today: Date | None = None
) -> DateRange:
    """
    Compute the window ``[today, today + days_ahead]``.

    Args:
        days_ahead: Lookahead in calendar days, must be positive
        timezone: Zone used to decide what "today" is
        today: Fixed start date, mainly for tests

    Returns:
        DateRange covering the lookahead window
    """
    if days_ahead <= 0:
        raise ValueError(f"Lookahead must be greater than zero, got {days_ahead}")

    start = today or pendulum.today(timezone).date()

    return DateRange(start=start, end=start.add(days=days_ahead))
