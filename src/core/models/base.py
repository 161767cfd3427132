"""Shared pieces for the stored record models."""

import re
from datetime import date, datetime, timezone
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
# Stored timestamps are always UTC with a Z suffix.
UTC_TIMESTAMP_PATTERN = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{1,6})?Z$"

UUID_RE = re.compile(UUID_PATTERN)


def _calendar_date(value: str) -> str:
    date.fromisoformat(value)
    return value


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value)


def _iso_timestamp(value: str) -> str:
    parse_timestamp(value)
    return value


Uuid = Annotated[str, Field(pattern=UUID_PATTERN)]
IsoDate = Annotated[str, Field(pattern=ISO_DATE_PATTERN), AfterValidator(_calendar_date)]
Timestamp = Annotated[str, Field(pattern=UTC_TIMESTAMP_PATTERN), AfterValidator(_iso_timestamp)]


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CamelModel(BaseModel):
    """Python-side snake_case fields, camelCase on the wire and in DynamoDB."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
