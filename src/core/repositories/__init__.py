"""
Data access for trips and schedules.
"""

from core.repositories.schedule import ScheduleRepository
from core.repositories.trip import TripRepository

__all__ = ["ScheduleRepository", "TripRepository"]
