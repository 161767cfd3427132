from os import environ

from pydantic import BaseModel, ConfigDict, Field


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    aws_region: str
    dynamodb_endpoint: str | None = None
    trips_table: str
    trips_list_index: str
    trip_schedules_table: str
    # Every trip shares this GSI partition value so "list all trips" is one query.
    # It is a single hot partition once trip volume grows.
    trip_list_partition_key: str = Field(..., min_length=1)
    default_principal: str = Field(..., min_length=1)
    batch_write_max_attempts: int = Field(default=8, ge=1)
    batch_write_backoff_base_seconds: float = Field(default=0.05, ge=0)
    batch_write_backoff_max_seconds: float = Field(default=2.0, ge=0)
    environment: str


_cached_config: Config | None = None


def _reset_config() -> None:
    """Reset cached config: for testing only."""
    global _cached_config
    _cached_config = None


def get_config() -> Config:
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    _cached_config = Config(
        aws_region=environ.get("AWS_REGION", "us-east-1"),
        dynamodb_endpoint=environ.get("DYNAMODB_ENDPOINT"),
        trips_table=environ.get("DYNAMODB_TRIPS_TABLE", "Trips"),
        trips_list_index=environ.get("DYNAMODB_TRIPS_LIST_INDEX", "TripsListIndex"),
        trip_schedules_table=environ.get("DYNAMODB_TRIP_SCHEDULES_TABLE", "TripSchedules"),
        trip_list_partition_key=environ.get("TRIP_LIST_PARTITION_KEY", "TRIP"),
        default_principal=environ.get("DEFAULT_PRINCIPAL", "anonymous"),
        batch_write_max_attempts=int(environ.get("BATCH_WRITE_MAX_ATTEMPTS", "8")),
        batch_write_backoff_base_seconds=float(environ.get("BATCH_WRITE_BACKOFF_BASE_SECONDS", "0.05")),
        batch_write_backoff_max_seconds=float(environ.get("BATCH_WRITE_BACKOFF_MAX_SECONDS", "2.0")),
        environment=environ.get("ENVIRONMENT", "local"),
    )
    return _cached_config
