"""Shared test fixtures for the trip itinerary store."""

import os
import sys
import uuid
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from dotenv import load_dotenv

# Load .env file for test configuration
load_dotenv()

# Unset AWS_PROFILE for local testing (DynamoDB Local doesn't need it)
if "AWS_PROFILE" in os.environ:
    del os.environ["AWS_PROFILE"]

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


@pytest.fixture
def config():
    from core.config import Config

    return Config(
        aws_region="us-east-1",
        trips_table="Trips",
        trips_list_index="TripsListIndex",
        trip_schedules_table="TripSchedules",
        trip_list_partition_key="TRIP",
        default_principal="anonymous",
        batch_write_max_attempts=3,
        batch_write_backoff_base_seconds=0.01,
        batch_write_backoff_max_seconds=0.05,
        environment="test",
    )


@pytest.fixture
def dynamo():
    """A low-level DynamoDB client mock."""
    return MagicMock()


# DynamoDB Local fixtures
@pytest.fixture(scope="session")
def dynamodb_client():
    """Provide a DynamoDB client for integration tests."""
    import boto3

    endpoint = os.environ.get("DYNAMODB_ENDPOINT")
    if not endpoint:
        pytest.skip("DYNAMODB_ENDPOINT is not configured")

    return boto3.client(
        "dynamodb",
        endpoint_url=endpoint,
        region_name=os.environ.get("AWS_REGION", "us-east-1"),
        aws_access_key_id="dummy",
        aws_secret_access_key="dummy",
    )


@pytest.fixture(scope="session")
def local_tables(dynamodb_client):
    """Create uniquely named Trips/TripSchedules tables and drop them afterwards."""
    suffix = uuid.uuid4().hex[:8]
    names = {
        "trips_table": f"Trips-{suffix}",
        "trips_list_index": "TripsListIndex",
        "trip_schedules_table": f"TripSchedules-{suffix}",
    }

    dynamodb_client.create_table(
        TableName=names["trips_table"],
        KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
        AttributeDefinitions=[
            {"AttributeName": "id", "AttributeType": "S"},
            {"AttributeName": "listPartitionKey", "AttributeType": "S"},
        ],
        GlobalSecondaryIndexes=[
            {
                "IndexName": names["trips_list_index"],
                "KeySchema": [{"AttributeName": "listPartitionKey", "KeyType": "HASH"}],
                "Projection": {"ProjectionType": "ALL"},
            }
        ],
        BillingMode="PAY_PER_REQUEST",
    )
    dynamodb_client.create_table(
        TableName=names["trip_schedules_table"],
        KeySchema=[
            {"AttributeName": "tripId", "KeyType": "HASH"},
            {"AttributeName": "scheduleId", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "tripId", "AttributeType": "S"},
            {"AttributeName": "scheduleId", "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )
    waiter = dynamodb_client.get_waiter("table_exists")
    waiter.wait(TableName=names["trips_table"])
    waiter.wait(TableName=names["trip_schedules_table"])

    yield names

    dynamodb_client.delete_table(TableName=names["trips_table"])
    dynamodb_client.delete_table(TableName=names["trip_schedules_table"])


@pytest.fixture
def local_config(local_tables):
    from core.config import Config

    return Config(
        aws_region=os.environ.get("AWS_REGION", "us-east-1"),
        dynamodb_endpoint=os.environ.get("DYNAMODB_ENDPOINT"),
        # A fresh list partition per test keeps list_all() isolated.
        trip_list_partition_key=f"TRIP-{uuid.uuid4().hex[:8]}",
        default_principal="anonymous",
        environment="test",
        **local_tables,
    )


@pytest.fixture
def local_service(dynamodb_client, local_config):
    from core.repositories import ScheduleRepository, TripRepository
    from core.services import ItineraryService

    return ItineraryService(
        TripRepository(dynamodb_client, local_config),
        ScheduleRepository(dynamodb_client, local_config),
        default_principal=local_config.default_principal,
    )
