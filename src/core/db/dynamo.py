"""DynamoDB wire-format helpers shared by the repositories."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from decimal import Decimal
from typing import Any

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError

from core.errors import CONDITIONAL_CHECK_FAILED, TripStoreError, client_error_code, translate_client_error

# BatchWriteItem accepts at most 25 put/delete requests per call.
BATCH_WRITE_LIMIT = 25

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()



def serialize_item(item: dict[str, Any]) -> dict[str, Any]:
    return {key: _serializer.serialize(value) for key, value in item.items()}


def _plain(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {key: _plain(inner) for key, inner in value.items()}
    if isinstance(value, list):
        return [_plain(inner) for inner in value]
    return value


def deserialize_item(item: dict[str, Any]) -> dict[str, Any]:
    """Decode a low-level item; integral numbers come back as int, not Decimal."""
    return {key: _plain(_deserializer.deserialize(value)) for key, value in item.items()}


def iter_pages(operation: Callable[..., dict[str, Any]], **kwargs: Any) -> Iterator[dict[str, Any]]:
    """Yield every page of a query/scan, following LastEvaluatedKey."""
    last_key = None
    while True:
        page_kwargs = dict(kwargs)
        if last_key:
            page_kwargs["ExclusiveStartKey"] = last_key

        response = operation(**page_kwargs)
        yield response

        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            break


@contextmanager
def storage_errors(
    operation: str,
    on_condition_failed: Callable[[], TripStoreError] | None = None,
) -> Iterator[None]:
    """Reclassify botocore failures raised inside the block.

    on_condition_failed builds the error for a failed ConditionExpression; without
    it a failed guard is reported like any other storage failure.
    """
    try:
        yield
    except ClientError as e:
        if on_condition_failed is not None and client_error_code(e) == CONDITIONAL_CHECK_FAILED:
            raise on_condition_failed() from e
        raise translate_client_error(e, operation) from e
    except BotoCoreError as e:
        raise translate_client_error(e, operation) from e
