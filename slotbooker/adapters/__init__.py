"""
Adapters layer - External integrations (Calendly booking API).
"""

from .calendly_client import CalendlyClient, EventTypeCache
from .mock_calendly_client import MockCalendlyClient

__all__ = ["CalendlyClient", "EventTypeCache", "MockCalendlyClient"]
