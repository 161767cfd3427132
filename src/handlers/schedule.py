"""Single schedule handler: PATCH and DELETE /trips/{tripId}/schedules/{scheduleId}."""

from typing import Any

from core.errors import ErrorCode, NotFoundError
from core.responses import dispatch, json_response, parse_json_body, path_parameter
from core.services import get_itinerary_service


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    return dispatch(event, {"PATCH": _update_schedule, "DELETE": _delete_schedule})


def _update_schedule(event: dict[str, Any]) -> dict[str, Any]:
    trip_id = path_parameter(event, "tripId")
    schedule_id = path_parameter(event, "scheduleId")
    body = parse_json_body(event)
    schedule = get_itinerary_service().update_schedule(trip_id, schedule_id, body)
    return json_response(200, schedule.to_record())


def _delete_schedule(event: dict[str, Any]) -> dict[str, Any]:
    trip_id = path_parameter(event, "tripId")
    schedule_id = path_parameter(event, "scheduleId")
    if not get_itinerary_service().delete_schedule(trip_id, schedule_id):
        raise NotFoundError(f"Schedule {trip_id}/{schedule_id} not found", code=ErrorCode.SCHEDULE_NOT_FOUND)
    return json_response(200, {"success": True})
