"""
slotbooker - find the first open Calendly slot and book it.
"""

__version__ = "0.1.0"
