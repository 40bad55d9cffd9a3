"""
Parsing of public booking-page URLs.
"""

from dataclasses import dataclass
from urllib.parse import urlparse

from .exceptions import MalformedUrlError


@dataclass(frozen=True)
class BookingPageRef:
    """Profile and event-type slugs identifying a booking page."""
    profile_slug: str
    event_type_slug: str


def parse_booking_url(url: str) -> BookingPageRef:
    """
    Split a booking-page URL into its profile and event-type slugs.

    Example: ``https://calendly.com/acme/30min`` -> ("acme", "30min")

    Raises:
        MalformedUrlError: If the URL has no http(s) scheme, no host, or
            fewer than two path segments
    """
    parsed = urlparse(url.strip()) if url else None

    if parsed is None or parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise MalformedUrlError(f"Not a booking-page URL: {url!r}")

    segments = [segment for segment in parsed.path.split("/") if segment]
    if len(segments) < 2:
        raise MalformedUrlError(
            f"Booking-page URL must contain a profile and an event type: {url!r}"
        )

    return BookingPageRef(profile_slug=segments[0], event_type_slug=segments[1])
