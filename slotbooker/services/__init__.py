"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .slot_booker import BookingRunReport, RunStatus, SchedulingClientProtocol, SlotBookerService

__all__ = ["BookingRunReport", "RunStatus", "SchedulingClientProtocol", "SlotBookerService"]
