"""Unit tests for the trip repository."""

import pytest
from factories import TRIP_ID, client_error, trip_record, wire

from core.errors import ConflictError, CorruptRecordError, ErrorCode, NotFoundError, PermissionDeniedError
from core.models import CreateTripInput
from core.repositories import TripRepository

KYOTO = CreateTripInput(destination="Kyoto", start_date="2026-03-10", end_date="2026-03-12", transportation="train")


@pytest.fixture
def repo(dynamo, config):
    return TripRepository(dynamo, config)


def test_create_trip(repo, dynamo):
    trip = repo.create(KYOTO, "anonymous")

    assert len(trip.id) == 36
    assert trip.created_at == trip.updated_at
    assert trip.created_at.endswith("Z")
    assert trip.created_by_sub == "anonymous"
    assert trip.memo is None

    dynamo.put_item.assert_called_once()
    kwargs = dynamo.put_item.call_args.kwargs
    assert kwargs["TableName"] == "Trips"
    assert kwargs["ConditionExpression"] == "attribute_not_exists(id)"
    item = kwargs["Item"]
    assert item["id"] == {"S": trip.id}
    assert item["listPartitionKey"] == {"S": "TRIP"}
    assert item["destination"] == {"S": "Kyoto"}
    assert "memo" not in item


def test_create_trip_with_memo(repo, dynamo):
    repo.create(KYOTO.model_copy(update={"memo": "JR pass"}), "anonymous")
    assert dynamo.put_item.call_args.kwargs["Item"]["memo"] == {"S": "JR pass"}


def test_create_trip_identity_collision(repo, dynamo):
    dynamo.put_item.side_effect = client_error("ConditionalCheckFailedException")
    with pytest.raises(ConflictError):
        repo.create(KYOTO, "anonymous")


def test_get_by_id_hit(repo, dynamo):
    dynamo.get_item.return_value = {"Item": wire(trip_record())}

    trip = repo.get_by_id(TRIP_ID)

    assert trip is not None
    assert trip.destination == "Kyoto"
    dynamo.get_item.assert_called_once_with(TableName="Trips", Key={"id": {"S": TRIP_ID}})


def test_get_by_id_miss(repo, dynamo):
    dynamo.get_item.return_value = {}
    assert repo.get_by_id(TRIP_ID) is None


def test_get_by_id_corrupt_record(repo, dynamo):
    dynamo.get_item.return_value = {"Item": wire(trip_record(endDate="not-a-date"))}
    with pytest.raises(CorruptRecordError):
        repo.get_by_id(TRIP_ID)


def test_exists(repo, dynamo):
    dynamo.get_item.return_value = {"Item": {"id": {"S": TRIP_ID}}}
    assert repo.exists(TRIP_ID) is True
    assert dynamo.get_item.call_args.kwargs["ProjectionExpression"] == "id"

    dynamo.get_item.return_value = {}
    assert repo.exists(TRIP_ID) is False


def test_list_all_sorted_by_start_date_desc(repo, dynamo):
    dynamo.query.return_value = {
        "Items": [
            wire(trip_record(id="11111111-1111-4111-8111-111111111111", startDate="2026-01-01", endDate="2026-01-02")),
            wire(trip_record(id="22222222-2222-4222-8222-222222222222", startDate="2026-05-01", endDate="2026-05-02")),
            wire(trip_record(id="33333333-3333-4333-8333-333333333333", startDate="2026-03-01", endDate="2026-03-02")),
        ]
    }

    trips = repo.list_all()

    assert [trip.start_date for trip in trips] == ["2026-05-01", "2026-03-01", "2026-01-01"]
    kwargs = dynamo.query.call_args.kwargs
    assert kwargs["IndexName"] == "TripsListIndex"
    assert kwargs["ExpressionAttributeNames"] == {"#lpk": "listPartitionKey"}
    assert kwargs["ExpressionAttributeValues"] == {":lpk": {"S": "TRIP"}}


def test_list_all_follows_pages(repo, dynamo):
    dynamo.query.side_effect = [
        {"Items": [wire(trip_record())], "LastEvaluatedKey": {"id": {"S": TRIP_ID}}},
        {"Items": [wire(trip_record(id="22222222-2222-4222-8222-222222222222"))]},
    ]

    assert len(repo.list_all()) == 2
    assert dynamo.query.call_count == 2


def test_list_all_fails_on_corrupt_item(repo, dynamo):
    dynamo.query.return_value = {"Items": [wire(trip_record()), wire({"id": TRIP_ID})]}
    with pytest.raises(CorruptRecordError):
        repo.list_all()


def test_list_all_empty(repo, dynamo):
    dynamo.query.return_value = {"Items": []}
    assert repo.list_all() == []


def test_delete_by_id(repo, dynamo):
    repo.delete_by_id(TRIP_ID)
    dynamo.delete_item.assert_called_once_with(TableName="Trips", Key={"id": {"S": TRIP_ID}})


def test_delete_by_id_access_denied(repo, dynamo):
    dynamo.delete_item.side_effect = client_error("AccessDeniedException", "DeleteItem")
    with pytest.raises(PermissionDeniedError):
        repo.delete_by_id(TRIP_ID)


def test_update_memo_sets_value(repo, dynamo):
    dynamo.update_item.return_value = {"Attributes": wire(trip_record(memo="JR pass"))}

    trip = repo.update_memo(TRIP_ID, "JR pass")

    assert trip.memo == "JR pass"
    kwargs = dynamo.update_item.call_args.kwargs
    assert kwargs["ConditionExpression"] == "attribute_exists(id)"
    assert kwargs["ReturnValues"] == "ALL_NEW"
    assert kwargs["UpdateExpression"] == "SET #memo = :memo, #updatedAt = :updatedAt"
    assert kwargs["ExpressionAttributeValues"][":memo"] == {"S": "JR pass"}


def test_update_memo_clears_value(repo, dynamo):
    dynamo.update_item.return_value = {"Attributes": wire(trip_record())}

    trip = repo.update_memo(TRIP_ID, None)

    assert trip.memo is None
    kwargs = dynamo.update_item.call_args.kwargs
    assert kwargs["UpdateExpression"] == "SET #updatedAt = :updatedAt REMOVE #memo"
    assert ":memo" not in kwargs["ExpressionAttributeValues"]


def test_update_memo_missing_trip(repo, dynamo):
    dynamo.update_item.side_effect = client_error("ConditionalCheckFailedException", "UpdateItem")

    with pytest.raises(NotFoundError) as exc_info:
        repo.update_memo(TRIP_ID, "JR pass")

    assert exc_info.value.code is ErrorCode.TRIP_NOT_FOUND
