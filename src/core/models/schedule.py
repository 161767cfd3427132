import re
from datetime import datetime
from enum import Enum
from typing import Any
from urllib.parse import urlsplit

from pydantic import Field, ValidationInfo, field_validator, model_validator

from core.models.base import CamelModel, Timestamp, Uuid, parse_timestamp

TIME_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)$"

_GOOGLE_HOST_RE = re.compile(r"^(www\.)?google\.[a-z]{2,3}(\.[a-z]{2})?$")
_MAPS_GOOGLE_HOST_RE = re.compile(r"^maps\.google\.[a-z]{2,3}(\.[a-z]{2})?$")


class ScheduleType(str, Enum):
    HOTEL = "hotel"
    FOOD = "food"
    SPOT = "spot"
    EVENT = "event"


class ReservationStatus(str, Enum):
    """Classification used by schedules written before scheduleType existed."""

    RESERVED = "reserved"
    PENDING = "pending"
    NOT_REQUIRED = "not_required"


def is_map_link(value: str) -> bool:
    """Accept Google Maps URLs only (full, regional and short-link forms)."""
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if parts.scheme not in ("http", "https"):
        return False
    host = (parts.hostname or "").lower()
    path = parts.path or "/"
    if _MAPS_GOOGLE_HOST_RE.match(host) or host == "maps.app.goo.gl":
        return True
    if _GOOGLE_HOST_RE.match(host) or host == "goo.gl":
        return path == "/maps" or path.startswith("/maps/")
    return False


class ScheduleContent(CamelModel):
    """Client-supplied schedule fields. Updates replace all of them at once."""

    day_index: int = Field(..., ge=1)
    schedule_type: ScheduleType
    start_time: str = Field(..., pattern=TIME_PATTERN)
    end_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    map_link: str | None = Field(default=None, max_length=2048)
    title: str | None = Field(default=None, max_length=100)
    detail: str | None = Field(default=None, max_length=500)

    @field_validator("day_index", mode="before")
    @classmethod
    def day_index_is_number(cls, value: Any) -> Any:
        # JSON numbers only; integral floats such as 1.0 pass through to int parsing
        if isinstance(value, (bool, str)):
            raise ValueError("dayIndex must be a number")
        return value

    @field_validator("end_time", mode="before")
    @classmethod
    def blank_end_time_is_absent(cls, value: Any) -> Any:
        return None if value == "" else value

    @field_validator("map_link", "title", "detail", mode="before")
    @classmethod
    def strip_blank_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("end_time")
    @classmethod
    def end_time_rules(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is None:
            return value
        if info.data.get("schedule_type") is ScheduleType.HOTEL:
            raise ValueError("endTime is not allowed for hotel schedules")
        start_time = info.data.get("start_time")
        if start_time is not None and value < start_time:
            raise ValueError("endTime must be greater than or equal to startTime")
        return value

    @field_validator("map_link")
    @classmethod
    def map_link_is_google_maps(cls, value: str | None) -> str | None:
        if value is not None and not is_map_link(value):
            raise ValueError("mapLink must be a Google Maps URL")
        return value


class CreateScheduleInput(ScheduleContent):
    pass


class UpdateScheduleContentInput(ScheduleContent):
    pass


class Schedule(CamelModel):
    """A schedule as stored. Reads accept the legacy name/reservationStatus shape."""

    trip_id: Uuid
    schedule_id: Uuid
    day_index: int = Field(..., ge=1)
    schedule_type: ScheduleType = ScheduleType.SPOT
    start_time: str = Field(..., pattern=TIME_PATTERN)
    end_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    map_link: str | None = Field(default=None, max_length=2048)
    title: str | None = Field(default=None, max_length=100)
    detail: str | None = Field(default=None, max_length=500)
    name: str | None = Field(default=None, max_length=100, exclude=True)
    reservation_status: ReservationStatus | None = Field(default=None, exclude=True)
    created_at: Timestamp
    updated_at: Timestamp

    @model_validator(mode="before")
    @classmethod
    def upgrade_legacy_title(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("title") is None and data.get("name") is not None:
            return {**data, "title": data["name"]}
        return data

    @property
    def sort_key(self) -> tuple[int, str, datetime]:
        return (self.day_index, self.start_time, parse_timestamp(self.created_at))
