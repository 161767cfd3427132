from typing import Any

from pydantic import Field, ValidationInfo, field_validator

from core.models.base import CamelModel, IsoDate, Timestamp, Uuid


class CreateTripInput(CamelModel):
    destination: str = Field(..., min_length=1, max_length=100)
    start_date: IsoDate
    end_date: IsoDate
    transportation: str = Field(..., min_length=1, max_length=50)
    memo: str | None = Field(default=None, max_length=2000)

    @field_validator("memo", mode="before")
    @classmethod
    def blank_memo_is_absent(cls, value: Any) -> Any:
        return None if value == "" else value

    @field_validator("end_date")
    @classmethod
    def end_not_before_start(cls, value: str, info: ValidationInfo) -> str:
        start_date = info.data.get("start_date")
        if start_date is not None and value < start_date:
            raise ValueError("endDate must be greater than or equal to startDate")
        return value


class UpdateTripMemoInput(CamelModel):
    # None means "clear the memo"
    memo: str | None = Field(..., max_length=2000)

    @field_validator("memo", mode="before")
    @classmethod
    def memo_is_string(cls, value: Any) -> Any:
        if not isinstance(value, str):
            raise ValueError("memo must be a string")
        return value or None


class Trip(CreateTripInput):
    id: Uuid
    created_at: Timestamp
    updated_at: Timestamp
    created_by_sub: str = Field(..., min_length=1)
