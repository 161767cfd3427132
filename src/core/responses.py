"""API Gateway proxy request/response helpers shared by the HTTP handlers.

Maps the error taxonomy in core.errors onto status codes and a uniform JSON error
body: {"error": <code>, "message": <user message>, "details": [...]}.
"""

import base64
import json
import logging
from collections.abc import Callable
from typing import Any

from core.errors import ErrorCode, InvalidRequestError, TripStoreError, ValidationError

logger = logging.getLogger(__name__)

Route = Callable[[dict[str, Any]], dict[str, Any]]

STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INVALID_ID: 400,
    ErrorCode.INVALID_JSON: 400,
    ErrorCode.METHOD_NOT_ALLOWED: 405,
    ErrorCode.TRIP_NOT_FOUND: 404,
    ErrorCode.SCHEDULE_NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.PERMISSION_DENIED: 403,
    ErrorCode.CORRUPT_RECORD: 500,
    ErrorCode.STORAGE_UNAVAILABLE: 503,
    ErrorCode.THROTTLED: 503,
    ErrorCode.INTERNAL_ERROR: 500,
}


def json_response(status_code: int, body: Any) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, ensure_ascii=False),
    }


def error_response(error: TripStoreError) -> dict[str, Any]:
    body: dict[str, Any] = {"error": error.code.value, "message": error.user_message}
    if isinstance(error, ValidationError) and error.issues:
        body["details"] = [{"path": path, "message": message} for path, message in error.issues]
    return json_response(STATUS_CODES.get(error.code, 500), body)


def parse_json_body(event: dict[str, Any]) -> Any:
    body = event.get("body") or ""
    try:
        if event.get("isBase64Encoded"):
            body = base64.b64decode(body).decode("utf-8")
        return json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        raise InvalidRequestError("Request body is not valid JSON", code=ErrorCode.INVALID_JSON) from e


def path_parameter(event: dict[str, Any], name: str) -> str | None:
    return (event.get("pathParameters") or {}).get(name)


def _http_method(event: dict[str, Any]) -> str:
    # REST API (v1) events carry httpMethod, HTTP API (v2) events requestContext.http.method
    http = (event.get("requestContext") or {}).get("http") or {}
    method = event.get("httpMethod") or http.get("method") or ""
    return method.upper()


def dispatch(event: dict[str, Any], routes: dict[str, Route]) -> dict[str, Any]:
    """Run the route for the event's HTTP method and turn failures into responses."""
    method = _http_method(event)
    route = routes.get(method)
    if route is None:
        return error_response(
            InvalidRequestError(f"Method {method or '?'} not allowed", code=ErrorCode.METHOD_NOT_ALLOWED)
        )

    try:
        return route(event)
    except TripStoreError as e:
        if e.code is ErrorCode.PERMISSION_DENIED or STATUS_CODES.get(e.code, 500) >= 500:
            logger.error("%s %s failed: %s", method, event.get("path", ""), e.message)
        return error_response(e)
    except Exception:
        logger.exception("Unhandled error in %s %s", method, event.get("path", ""))
        return error_response(TripStoreError("Unhandled error"))
