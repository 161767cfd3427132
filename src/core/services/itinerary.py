"""Itinerary service: the caller-facing contract over the trip and schedule repositories.

Every entry point validates identifiers and payloads before touching DynamoDB, so
client mistakes surface as ValidationError / InvalidIdentifierError and never as
storage errors.
"""

import logging
from functools import lru_cache
from typing import Any

from core.clients import get_dynamo_client
from core.config import get_config
from core.errors import ErrorCode, NotFoundError
from core.models import Schedule, Trip
from core.repositories import ScheduleRepository, TripRepository
from core.validation import (
    parse_create_schedule,
    parse_create_trip,
    parse_schedule_id,
    parse_trip_id,
    parse_update_schedule_content,
    parse_update_trip_memo,
)

logger = logging.getLogger(__name__)


class ItineraryService:
    def __init__(self, trips: TripRepository, schedules: ScheduleRepository, default_principal: str) -> None:
        self._trips = trips
        self._schedules = schedules
        self._default_principal = default_principal

    # --- trips ---

    def create_trip(self, raw: Any, principal: str | None = None) -> Trip:
        trip_input = parse_create_trip(raw)
        return self._trips.create(trip_input, principal or self._default_principal)

    def list_trips(self) -> list[Trip]:
        return self._trips.list_all()

    def get_trip(self, trip_id: Any) -> Trip | None:
        return self._trips.get_by_id(parse_trip_id(trip_id))

    def update_trip_memo(self, trip_id: Any, raw: Any) -> Trip:
        valid_id = parse_trip_id(trip_id)
        memo_input = parse_update_trip_memo(raw)
        return self._trips.update_memo(valid_id, memo_input.memo)

    def delete_trip(self, trip_id: Any) -> int:
        """Delete a trip and its schedules; returns how many schedules went with it.

        Not transactional. Schedules are removed before the trip, so an interrupted
        delete leaves the trip visible and a retry finishes the job. Schedules written
        concurrently with the delete are left for sweep_orphaned_schedules().
        """
        valid_id = parse_trip_id(trip_id)
        if self._trips.get_by_id(valid_id) is None:
            raise NotFoundError(f"Trip {valid_id} not found", code=ErrorCode.TRIP_NOT_FOUND)

        deleted_schedules = self._schedules.delete_all_by_trip(valid_id)
        self._trips.delete_by_id(valid_id)
        return deleted_schedules

    # --- schedules ---

    def create_schedule(self, trip_id: Any, raw: Any) -> Schedule:
        valid_id = parse_trip_id(trip_id)
        schedule_input = parse_create_schedule(raw)
        if not self._trips.exists(valid_id):
            raise NotFoundError(f"Trip {valid_id} not found", code=ErrorCode.TRIP_NOT_FOUND)
        return self._schedules.create(valid_id, schedule_input)

    def list_schedules(self, trip_id: Any) -> list[Schedule]:
        return self._schedules.list_by_trip(parse_trip_id(trip_id))

    def update_schedule(self, trip_id: Any, schedule_id: Any, raw: Any) -> Schedule:
        valid_trip_id = parse_trip_id(trip_id)
        valid_schedule_id = parse_schedule_id(schedule_id)
        content = parse_update_schedule_content(raw)
        return self._schedules.update_content(valid_trip_id, valid_schedule_id, content)

    def delete_schedule(self, trip_id: Any, schedule_id: Any) -> bool:
        return self._schedules.delete_by_id(parse_trip_id(trip_id), parse_schedule_id(schedule_id))

    def delete_all_schedules_for_trip(self, trip_id: Any) -> int:
        return self._schedules.delete_all_by_trip(parse_trip_id(trip_id))

    # --- maintenance ---

    def sweep_orphaned_schedules(self) -> dict[str, int]:
        """Delete schedules whose trip no longer exists."""
        checked = 0
        orphaned_trips = 0
        deleted = 0

        for trip_id in sorted(self._schedules.list_trip_ids()):
            checked += 1
            if self._trips.exists(trip_id):
                continue
            orphaned_trips += 1
            deleted += self._schedules.delete_all_by_trip(trip_id)
            logger.info("Swept orphaned schedules of missing trip %s", trip_id)

        return {"checked": checked, "orphaned_trips": orphaned_trips, "deleted": deleted}


@lru_cache(maxsize=1)
def get_itinerary_service() -> ItineraryService:
    config = get_config()
    dynamo_client = get_dynamo_client()
    return ItineraryService(
        TripRepository(dynamo_client, config),
        ScheduleRepository(dynamo_client, config),
        default_principal=config.default_principal,
    )
