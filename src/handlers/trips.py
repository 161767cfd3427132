"""Trip collection handler: GET /trips, POST /trips."""

from typing import Any

from core.responses import dispatch, json_response, parse_json_body
from core.services import get_itinerary_service


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    return dispatch(event, {"GET": _list_trips, "POST": _create_trip})


def _list_trips(event: dict[str, Any]) -> dict[str, Any]:
    trips = get_itinerary_service().list_trips()
    return json_response(200, [trip.to_record() for trip in trips])


def _create_trip(event: dict[str, Any]) -> dict[str, Any]:
    body = parse_json_body(event)
    trip = get_itinerary_service().create_trip(body)
    return json_response(201, trip.to_record())
