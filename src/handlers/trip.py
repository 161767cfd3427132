"""Single trip handler: GET, PATCH (memo) and DELETE /trips/{tripId}."""

import logging
from typing import Any

from core.errors import ErrorCode, NotFoundError
from core.responses import dispatch, json_response, parse_json_body, path_parameter
from core.services import get_itinerary_service

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    return dispatch(event, {"GET": _get_trip, "PATCH": _update_memo, "DELETE": _delete_trip})


def _get_trip(event: dict[str, Any]) -> dict[str, Any]:
    trip_id = path_parameter(event, "tripId")
    trip = get_itinerary_service().get_trip(trip_id)
    if trip is None:
        raise NotFoundError(f"Trip {trip_id} not found", code=ErrorCode.TRIP_NOT_FOUND)
    return json_response(200, trip.to_record())


def _update_memo(event: dict[str, Any]) -> dict[str, Any]:
    trip_id = path_parameter(event, "tripId")
    body = parse_json_body(event)
    trip = get_itinerary_service().update_trip_memo(trip_id, body)
    return json_response(200, trip.to_record())


def _delete_trip(event: dict[str, Any]) -> dict[str, Any]:
    trip_id = path_parameter(event, "tripId")
    deleted_schedules = get_itinerary_service().delete_trip(trip_id)
    logger.info("Deleted trip %s with %d schedules", trip_id, deleted_schedules)
    return json_response(200, {"success": True})
