"""
Validation layer: the single gate for client payloads and stored records.

Client payload failures raise ValidationError with (field path, message)
issues. Stored records that fail their schema raise CorruptRecordError: a
broken record is never repaired or skipped.
"""

from typing import Any, TypeVar

import pydantic

from core.errors import CorruptRecordError, InvalidIdentifierError, ValidationError
from core.models import (
    CreateScheduleInput,
    CreateTripInput,
    Schedule,
    Trip,
    UpdateScheduleContentInput,
    UpdateTripMemoInput,
)
from core.models.base import UUID_RE

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def _issues(error: pydantic.ValidationError) -> list[tuple[str, str]]:
    return [(".".join(str(part) for part in issue["loc"]) or "(root)", issue["msg"]) for issue in error.errors()]


def _parse_input(model: type[ModelT], raw: Any) -> ModelT:
    try:
        return model.model_validate(raw)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid {model.__name__}", issues=_issues(e)) from e


def _parse_persisted(model: type[ModelT], raw: Any) -> ModelT:
    try:
        return model.model_validate(raw)
    except pydantic.ValidationError as e:
        raise CorruptRecordError(f"{model.__name__} item shape is invalid in DynamoDB", issues=_issues(e)) from e


def parse_create_trip(raw: Any) -> CreateTripInput:
    return _parse_input(CreateTripInput, raw)


def parse_update_trip_memo(raw: Any) -> UpdateTripMemoInput:
    return _parse_input(UpdateTripMemoInput, raw)


def parse_create_schedule(raw: Any) -> CreateScheduleInput:
    return _parse_input(CreateScheduleInput, raw)


def parse_update_schedule_content(raw: Any) -> UpdateScheduleContentInput:
    return _parse_input(UpdateScheduleContentInput, raw)


def parse_persisted_trip(raw: Any) -> Trip:
    return _parse_persisted(Trip, raw)


def parse_persisted_schedule(raw: Any) -> Schedule:
    return _parse_persisted(Schedule, raw)


def _parse_uuid(raw: Any, field: str) -> str:
    if not isinstance(raw, str) or not UUID_RE.fullmatch(raw):
        raise InvalidIdentifierError(f"Invalid {field}", issues=[(field, "must be a UUID")])
    return raw


def parse_trip_id(raw: Any) -> str:
    return _parse_uuid(raw, "tripId")


def parse_schedule_id(raw: Any) -> str:
    return _parse_uuid(raw, "scheduleId")
