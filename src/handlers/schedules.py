"""Schedule collection handler: GET, POST and DELETE /trips/{tripId}/schedules."""

from typing import Any

from core.responses import dispatch, json_response, parse_json_body, path_parameter
from core.services import get_itinerary_service


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    return dispatch(event, {"GET": _list_schedules, "POST": _create_schedule, "DELETE": _delete_all})


def _list_schedules(event: dict[str, Any]) -> dict[str, Any]:
    schedules = get_itinerary_service().list_schedules(path_parameter(event, "tripId"))
    return json_response(200, [schedule.to_record() for schedule in schedules])


def _create_schedule(event: dict[str, Any]) -> dict[str, Any]:
    trip_id = path_parameter(event, "tripId")
    body = parse_json_body(event)
    schedule = get_itinerary_service().create_schedule(trip_id, body)
    return json_response(201, schedule.to_record())


def _delete_all(event: dict[str, Any]) -> dict[str, Any]:
    deleted = get_itinerary_service().delete_all_schedules_for_trip(path_parameter(event, "tripId"))
    return json_response(200, {"deleted": deleted})
