"""
Configuration management using Pydantic.
"""

from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfoNotFoundError

import pendulum
import yaml
from pendulum.tz.exceptions import InvalidTimezone
from pydantic import BaseModel, Field, field_validator

from .domain.booking_url import parse_booking_url
from .domain.models import BookingPreferences, InviteeIdentity


class InviteeConfig(BaseModel):
    """Identity used for bookings."""
    full_name: str = "John Doe"
    email: str = "john.doe@example.com"

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        """Reject obviously broken addresses."""
        if "@" not in value:
            raise ValueError(f"Invalid invitee email: {value!r}")
        return value.strip()

    def to_identity(self) -> InviteeIdentity:
        return InviteeIdentity(full_name=self.full_name, email=self.email)


class AppConfig(BaseModel):
    """Application configuration."""
    booking_url: str
    base_url: str = "https://calendly.com/api/booking"
    lookahead_days: int = 7
    timezone: str = "Asia/Calcutta"
    time_notation: Literal["12h", "24h"] = "12h"
    invitee: InviteeConfig = Field(default_factory=InviteeConfig)
    reuse_event_type: bool = False
    request_timeout_seconds: float | None = None

    @field_validator("booking_url")
    @classmethod
    def validate_booking_url(cls, value: str) -> str:
        """Ensure the URL names a profile and an event type."""
        parse_booking_url(value)
        return value.strip()

    @field_validator("lookahead_days")
    @classmethod
    def validate_lookahead(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("lookahead_days must be greater than zero")
        return value

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA identifier."""
        try:
            pendulum.timezone(value)
        except (InvalidTimezone, ZoneInfoNotFoundError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("request_timeout_seconds must be greater than zero")
        return value

    def get_preferences(self) -> BookingPreferences:
        """Get invitee display preferences."""
        return BookingPreferences(timezone=self.timezone, time_notation=self.time_notation)

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Read booking settings from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the YAML cannot be parsed or fails validation
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Copy config.example.yaml and set at least booking_url, or pass --url."
            )

        try:
            raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ValueError(
                f"{config_path} must be a mapping of booking settings, got {type(raw).__name__}"
            )

        return cls(**raw)


def get_default_config_path() -> Path:
    """
    Locate config.yaml.

    The working directory wins; otherwise ~/.config/slotbooker/config.yaml.
    If neither exists the working-directory path is returned so error
    messages point somewhere sensible.
    """
    local = Path.cwd() / "config.yaml"
    user = Path.home() / ".config" / "slotbooker" / "config.yaml"

    for candidate in (local, user):
        if candidate.exists():
            return candidate

    return local
