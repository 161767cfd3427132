#!/usr/bin/env python3
"""Create DynamoDB tables for local development.

This script creates the Trips table (with its list GSI) and the TripSchedules table
against DynamoDB Local, using the table names from the environment.

Usage:
    python scripts/create_local_tables.py
"""

import sys
from pathlib import Path

import boto3
from botocore.exceptions import ClientError

# Add src to path for config import
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import get_config


def create_trips_table(dynamodb, table_name: str, list_index: str) -> None:
    """Create the Trips table with the listPartitionKey GSI."""
    try:
        dynamodb.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "id", "KeyType": "HASH"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "id", "AttributeType": "S"},
                {"AttributeName": "listPartitionKey", "AttributeType": "S"},
            ],
            GlobalSecondaryIndexes=[
                {
                    "IndexName": list_index,
                    "KeySchema": [
                        {"AttributeName": "listPartitionKey", "KeyType": "HASH"},
                    ],
                    "Projection": {"ProjectionType": "ALL"},
                }
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        print(f"✓ Created {table_name} table with {list_index}")
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            print(f"✓ {table_name} table already exists")
        else:
            raise


def create_trip_schedules_table(dynamodb, table_name: str) -> None:
    """Create the TripSchedules table keyed by (tripId, scheduleId)."""
    try:
        dynamodb.create_table(
            TableName=table_name,
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
        print(f"✓ Created {table_name} table")
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            print(f"✓ {table_name} table already exists")
        else:
            raise


def main():
    """Create all DynamoDB tables."""
    config = get_config()

    endpoint_url = config.dynamodb_endpoint or "http://localhost:8000"

    print(f"Creating DynamoDB tables at {endpoint_url}...")
    print()

    # For DynamoDB Local, use dummy credentials
    dynamodb = boto3.client(
        "dynamodb",
        endpoint_url=endpoint_url,
        region_name=config.aws_region,
        aws_access_key_id="dummy",
        aws_secret_access_key="dummy",
    )

    create_trips_table(dynamodb, config.trips_table, config.trips_list_index)
    create_trip_schedules_table(dynamodb, config.trip_schedules_table)

    print()
    print("✅ All DynamoDB tables ready")


if __name__ == "__main__":
    main()
