"""
DynamoDB access helpers for the trip itinerary store.
"""

from core.db.dynamo import BATCH_WRITE_LIMIT, deserialize_item, iter_pages, serialize_item, storage_errors
from core.db.expressions import UpdateExpression

__all__ = [
    "BATCH_WRITE_LIMIT",
    "UpdateExpression",
    "deserialize_item",
    "iter_pages",
    "serialize_item",
    "storage_errors",
]
