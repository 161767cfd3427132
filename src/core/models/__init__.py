"""
Pydantic models for trips and schedules.
"""

from core.models.schedule import (
    CreateScheduleInput,
    ReservationStatus,
    Schedule,
    ScheduleContent,
    ScheduleType,
    UpdateScheduleContentInput,
)
from core.models.trip import CreateTripInput, Trip, UpdateTripMemoInput

__all__ = [
    "CreateScheduleInput",
    "CreateTripInput",
    "ReservationStatus",
    "Schedule",
    "ScheduleContent",
    "ScheduleType",
    "Trip",
    "UpdateScheduleContentInput",
    "UpdateTripMemoInput",
]
