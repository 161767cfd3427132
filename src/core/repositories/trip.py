"""Trip repository: CRUD for trips in the Trips table."""

import logging
import uuid
from typing import Any

from core.config import Config
from core.db import UpdateExpression, deserialize_item, iter_pages, serialize_item, storage_errors
from core.errors import ConflictError, ErrorCode, NotFoundError
from core.models import CreateTripInput, Trip
from core.models.base import utc_timestamp
from core.validation import parse_persisted_trip

logger = logging.getLogger(__name__)


class TripRepository:
    def __init__(self, dynamo_client: Any, config: Config) -> None:
        self._client = dynamo_client
        self._table = config.trips_table
        self._list_index = config.trips_list_index
        self._list_partition_key = config.trip_list_partition_key

    def create(self, trip_input: CreateTripInput, created_by: str) -> Trip:
        now = utc_timestamp()
        trip = Trip(
            id=str(uuid.uuid4()),
            **trip_input.model_dump(),
            created_at=now,
            updated_at=now,
            created_by_sub=created_by,
        )
        item = {**trip.to_record(), "listPartitionKey": self._list_partition_key}

        with storage_errors("create trip", lambda: ConflictError(f"Trip {trip.id} already exists")):
            self._client.put_item(
                TableName=self._table,
                Item=serialize_item(item),
                ConditionExpression="attribute_not_exists(id)",
            )

        logger.info("Created trip %s", trip.id)
        return trip

    def get_by_id(self, trip_id: str) -> Trip | None:
        with storage_errors("get trip"):
            response = self._client.get_item(TableName=self._table, Key={"id": {"S": trip_id}})

        item = response.get("Item")
        if not item:
            return None
        return parse_persisted_trip(deserialize_item(item))

    def exists(self, trip_id: str) -> bool:
        with storage_errors("check trip"):
            response = self._client.get_item(
                TableName=self._table,
                Key={"id": {"S": trip_id}},
                ProjectionExpression="id",
            )
        return bool(response.get("Item"))

    def list_all(self) -> list[Trip]:
        """All trips, newest startDate first.

        Reads the whole shared list partition; cost grows with the number of trips.
        """
        trips: list[Trip] = []
        with storage_errors("list trips"):
            for page in iter_pages(
                self._client.query,
                TableName=self._table,
                IndexName=self._list_index,
                KeyConditionExpression="#lpk = :lpk",
                ExpressionAttributeNames={"#lpk": "listPartitionKey"},
                ExpressionAttributeValues={":lpk": {"S": self._list_partition_key}},
            ):
                trips.extend(parse_persisted_trip(deserialize_item(item)) for item in page.get("Items", []))

        trips.sort(key=lambda trip: trip.start_date, reverse=True)
        return trips

    def delete_by_id(self, trip_id: str) -> None:
        with storage_errors("delete trip"):
            self._client.delete_item(TableName=self._table, Key={"id": {"S": trip_id}})
        logger.info("Deleted trip %s", trip_id)

    def update_memo(self, trip_id: str, memo: str | None) -> Trip:
        update = UpdateExpression().assign("memo", memo).set("updatedAt", utc_timestamp())

        with storage_errors("update trip memo", lambda: _trip_not_found(trip_id)):
            response = self._client.update_item(
                TableName=self._table,
                Key={"id": {"S": trip_id}},
                ConditionExpression="attribute_exists(id)",
                ReturnValues="ALL_NEW",
                **update.build(),
            )

        attributes = response.get("Attributes")
        if not attributes:
            raise _trip_not_found(trip_id)

        logger.info("Updated memo of trip %s", trip_id)
        return parse_persisted_trip(deserialize_item(attributes))


def _trip_not_found(trip_id: str) -> NotFoundError:
    return NotFoundError(f"Trip {trip_id} not found", code=ErrorCode.TRIP_NOT_FOUND)
