"""Schedule repository: CRUD for schedules partitioned by tripId."""

import logging
import uuid
from collections.abc import Iterator
from time import sleep
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core.config import Config
from core.db import (
    BATCH_WRITE_LIMIT,
    UpdateExpression,
    deserialize_item,
    iter_pages,
    serialize_item,
    storage_errors,
)
from core.errors import (
    CONDITIONAL_CHECK_FAILED,
    BatchDeleteIncompleteError,
    ConflictError,
    ErrorCode,
    NotFoundError,
    client_error_code,
    is_throttle_error,
    translate_client_error,
)
from core.models import CreateScheduleInput, Schedule, UpdateScheduleContentInput
from core.models.base import utc_timestamp
from core.validation import parse_persisted_schedule

logger = logging.getLogger(__name__)

_KEY_EXISTS = "attribute_exists(tripId) AND attribute_exists(scheduleId)"
_KEY_NOT_EXISTS = "attribute_not_exists(tripId) AND attribute_not_exists(scheduleId)"

# Attributes of the pre-scheduleType shape, dropped on every content update.
_LEGACY_ATTRIBUTES = ("name", "reservationStatus")


def _key(trip_id: str, schedule_id: str) -> dict[str, Any]:
    return {"tripId": {"S": trip_id}, "scheduleId": {"S": schedule_id}}


class ScheduleRepository:
    def __init__(self, dynamo_client: Any, config: Config) -> None:
        self._client = dynamo_client
        self._table = config.trip_schedules_table
        self._max_attempts = config.batch_write_max_attempts
        self._backoff_base = config.batch_write_backoff_base_seconds
        self._backoff_max = config.batch_write_backoff_max_seconds

    def create(self, trip_id: str, schedule_input: CreateScheduleInput) -> Schedule:
        now = utc_timestamp()
        schedule = Schedule(
            trip_id=trip_id,
            schedule_id=str(uuid.uuid4()),
            **schedule_input.model_dump(),
            created_at=now,
            updated_at=now,
        )

        with storage_errors(
            "create schedule",
            lambda: ConflictError(f"Schedule {trip_id}/{schedule.schedule_id} already exists"),
        ):
            self._client.put_item(
                TableName=self._table,
                Item=serialize_item(schedule.to_record()),
                ConditionExpression=_KEY_NOT_EXISTS,
            )

        logger.info("Created schedule %s for trip %s", schedule.schedule_id, trip_id)
        return schedule

    def _query_partition(self, trip_id: str, **kwargs: Any) -> Iterator[dict[str, Any]]:
        return iter_pages(
            self._client.query,
            TableName=self._table,
            KeyConditionExpression="#tripId = :tripId",
            ExpressionAttributeValues={":tripId": {"S": trip_id}},
            **kwargs,
        )

    def list_by_trip(self, trip_id: str) -> list[Schedule]:
        """Schedules of a trip ordered by dayIndex, then startTime, then createdAt."""
        schedules: list[Schedule] = []
        with storage_errors("list schedules"):
            for page in self._query_partition(trip_id, ExpressionAttributeNames={"#tripId": "tripId"}):
                schedules.extend(parse_persisted_schedule(deserialize_item(item)) for item in page.get("Items", []))

        schedules.sort(key=lambda schedule: schedule.sort_key)
        return schedules

    def update_content(
        self,
        trip_id: str,
        schedule_id: str,
        content: UpdateScheduleContentInput,
    ) -> Schedule:
        """Replace the schedule's content; optional fields missing from content are removed."""
        update = (
            UpdateExpression()
            .set("updatedAt", utc_timestamp())
            .set("dayIndex", content.day_index)
            .set("scheduleType", content.schedule_type.value)
            .set("startTime", content.start_time)
            .assign("endTime", content.end_time)
            .assign("mapLink", content.map_link)
            .assign("title", content.title)
            .assign("detail", content.detail)
        )
        for attribute in _LEGACY_ATTRIBUTES:
            update.remove(attribute)

        with storage_errors("update schedule", lambda: _schedule_not_found(trip_id, schedule_id)):
            response = self._client.update_item(
                TableName=self._table,
                Key=_key(trip_id, schedule_id),
                ConditionExpression=_KEY_EXISTS,
                ReturnValues="ALL_NEW",
                **update.build(),
            )

        attributes = response.get("Attributes")
        if not attributes:
            raise _schedule_not_found(trip_id, schedule_id)

        logger.info("Updated schedule %s for trip %s", schedule_id, trip_id)
        return parse_persisted_schedule(deserialize_item(attributes))

    def delete_by_id(self, trip_id: str, schedule_id: str) -> bool:
        """Delete one schedule. Returns False when it did not exist."""
        try:
            response = self._client.delete_item(
                TableName=self._table,
                Key=_key(trip_id, schedule_id),
                ConditionExpression=_KEY_EXISTS,
                ReturnValues="ALL_OLD",
            )
        except ClientError as e:
            if client_error_code(e) == CONDITIONAL_CHECK_FAILED:
                return False
            raise translate_client_error(e, "delete schedule") from e
        except BotoCoreError as e:
            raise translate_client_error(e, "delete schedule") from e

        existed = bool(response.get("Attributes"))
        if existed:
            logger.info("Deleted schedule %s for trip %s", schedule_id, trip_id)
        return existed

    def delete_all_by_trip(self, trip_id: str) -> int:
        """Delete every schedule of a trip, page by page, in batches of 25.

        Unprocessed items, and whole batches rejected by throttling, are re-submitted
        with capped exponential backoff until the batch drains. If the retry budget
        runs out, BatchDeleteIncompleteError reports how many schedules were removed
        before giving up.
        """
        deleted_count = 0
        with storage_errors("delete schedules by trip"):
            for page in self._query_partition(
                trip_id,
                ProjectionExpression="#tripId, #scheduleId",
                ExpressionAttributeNames={"#tripId": "tripId", "#scheduleId": "scheduleId"},
            ):
                keys = [{"tripId": item["tripId"], "scheduleId": item["scheduleId"]} for item in page.get("Items", [])]
                for start in range(0, len(keys), BATCH_WRITE_LIMIT):
                    deleted_count += self._delete_batch(keys[start : start + BATCH_WRITE_LIMIT], deleted_count)

        logger.info("Deleted %d schedules for trip %s", deleted_count, trip_id)
        return deleted_count

    def _delete_batch(self, keys: list[dict[str, Any]], deleted_before: int) -> int:
        pending = [{"DeleteRequest": {"Key": key}} for key in keys]
        attempt = 0
        while pending:
            if attempt >= self._max_attempts:
                raise BatchDeleteIncompleteError(
                    f"{len(pending)} schedule deletes still unprocessed after {attempt} attempts",
                    deleted_count=deleted_before + len(keys) - len(pending),
                )
            if attempt > 0:
                delay = min(self._backoff_max, self._backoff_base * 2 ** (attempt - 1))
                logger.warning("Retrying %d unprocessed schedule deletes in %.2fs", len(pending), delay)
                sleep(delay)

            attempt += 1
            try:
                response = self._client.batch_write_item(RequestItems={self._table: pending})
            except ClientError as e:
                # A throttled call processed nothing; the whole batch stays pending.
                if not is_throttle_error(e):
                    raise
                logger.warning("Schedule batch delete throttled (%s)", client_error_code(e))
                continue
            pending = response.get("UnprocessedItems", {}).get(self._table, [])

        return len(keys)

    def list_trip_ids(self) -> set[str]:
        """Every tripId that owns at least one schedule (full table scan)."""
        trip_ids: set[str] = set()
        with storage_errors("scan schedule trip ids"):
            for page in iter_pages(
                self._client.scan,
                TableName=self._table,
                ProjectionExpression="#tripId",
                ExpressionAttributeNames={"#tripId": "tripId"},
            ):
                trip_ids.update(item["tripId"]["S"] for item in page.get("Items", []))
        return trip_ids


def _schedule_not_found(trip_id: str, schedule_id: str) -> NotFoundError:
    return NotFoundError(f"Schedule {trip_id}/{schedule_id} not found", code=ErrorCode.SCHEDULE_NOT_FOUND)
