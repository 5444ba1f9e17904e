# File: src/parkmeter/models/parking_session_schemas.py
"""Pydantic schemas for the parking session API (camelCase on the wire)."""

import os
from datetime import date as date_type
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from parkmeter.core.validators import (
    clean_text,
    normalize_plate,
    validate_currency,
    validate_positive_minutes,
)

DEFAULT_ZONE = os.getenv("DEFAULT_ZONE", "General")
DEFAULT_PAYMENT_METHOD = os.getenv("DEFAULT_PAYMENT_METHOD", "cash")


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase in JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _as_utc(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc).isoformat()


def as_number(value: Decimal | None) -> float | None:
    """Money is a JSON number on the wire."""
    return None if value is None else float(value)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class PayRequest(CamelModel):
    """Schema for registering a new parking payment."""

    plate: str | None = Field(None, validate_default=True)
    zone: str | None = Field(None, validate_default=True)
    location: str | None = None
    minutes: int | None = Field(None, validate_default=True)
    amount: Decimal | None = Field(None, validate_default=True)
    payment_method: str | None = Field(None, validate_default=True)
    meter_id: str | None = None

    @field_validator("plate")
    @classmethod
    def validate_plate(cls, v: str | None) -> str:
        return normalize_plate(v)

    @field_validator("minutes")
    @classmethod
    def validate_minutes(cls, v: int | None) -> int:
        return validate_positive_minutes(v, "minutes")

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal | None) -> Decimal:
        """Missing amount means a free window."""
        if v is None:
            return Decimal("0.00")
        return validate_currency(v)

    @field_validator("zone")
    @classmethod
    def default_zone(cls, v: str | None) -> str:
        return clean_text(v, max_length=100) or DEFAULT_ZONE

    @field_validator("payment_method")
    @classmethod
    def default_payment_method(cls, v: str | None) -> str:
        return clean_text(v, max_length=50) or DEFAULT_PAYMENT_METHOD

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str | None) -> str | None:
        return clean_text(v, max_length=255)

    @field_validator("meter_id")
    @classmethod
    def validate_meter_id(cls, v: str | None) -> str | None:
        return clean_text(v, max_length=50)


class ExtendRequest(CamelModel):
    """Schema for adding time to the plate's active session."""

    plate: str | None = Field(None, validate_default=True)
    extra_minutes: int | None = Field(None, validate_default=True)
    extra_amount: Decimal | None = Field(None, validate_default=True)

    @field_validator("plate")
    @classmethod
    def validate_plate(cls, v: str | None) -> str:
        return normalize_plate(v)

    @field_validator("extra_minutes")
    @classmethod
    def validate_extra_minutes(cls, v: int | None) -> int:
        return validate_positive_minutes(v, "extraMinutes")

    @field_validator("extra_amount")
    @classmethod
    def validate_extra_amount(cls, v: Decimal | None) -> Decimal:
        if v is None:
            return Decimal("0.00")
        return validate_currency(v)


class MarkFinedRequest(CamelModel):
    """Schema for flagging a session as fined."""

    fine_reference: str | None = None

    @field_validator("fine_reference")
    @classmethod
    def validate_fine_reference(cls, v: str | None) -> str | None:
        return clean_text(v, max_length=100)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class ParkingSessionRead(CamelModel):
    """Schema for reading a parking session."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: UUID
    plate: str
    zone: str
    location: str | None = None
    meter_id: str | None = None
    start_time: datetime
    end_time: datetime
    paid_minutes: int
    amount: Decimal
    payment_method: str
    status: str
    fine_reference: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_serializer("start_time", "end_time", "created_at", "updated_at")
    def serialize_utc(self, value: datetime) -> str | None:
        return _as_utc(value)

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, value: Decimal) -> float:
        return as_number(value)


class ActiveSessionRead(ParkingSessionRead):
    """Active session with the time it has left."""

    remaining_minutes: int
    remaining_time: str


class ExpiredSessionRead(ParkingSessionRead):
    """Elapsed session with how long ago it ran out."""

    expired_minutes: int
    expired_time: str


class VerificationResult(CamelModel):
    """Outcome of checking whether a plate currently has paid time."""

    success: bool = True
    found: bool
    plate: str
    message: str | None = None
    valid: bool | None = None
    expired: bool | None = None
    session_id: UUID | None = None
    zone: str | None = None
    location: str | None = None
    meter_id: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    paid_minutes: int | None = None
    amount: Decimal | None = None
    payment_method: str | None = None
    status: str | None = None
    remaining_minutes: int | None = None
    remaining_time: str | None = None
    expired_minutes: int | None = None
    expired_time: str | None = None

    @field_serializer("start_time", "end_time")
    def serialize_utc(self, value: datetime | None) -> str | None:
        return _as_utc(value)

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, value: Decimal | None) -> float | None:
        return as_number(value)


class PayResponse(CamelModel):
    success: bool = True
    message: str
    paid_time: str
    session: ParkingSessionRead


class ExtendResponse(CamelModel):
    success: bool = True
    message: str
    total_time: str
    session: ParkingSessionRead


class MarkFinedResponse(CamelModel):
    success: bool = True
    message: str
    session: ParkingSessionRead


class HistoryResponse(CamelModel):
    success: bool = True
    plate: str
    total: int
    history: list[ParkingSessionRead]


class ActiveListResponse(CamelModel):
    success: bool = True
    total: int
    sessions: list[ActiveSessionRead]


class ExpiredListResponse(CamelModel):
    success: bool = True
    total: int
    sessions: list[ExpiredSessionRead]


class DailyStatistics(BaseModel):
    """Counters for one local calendar day. Keys are kept as published to agents."""

    pagos_hoy: int = Field(0, description="Sessions created during the day")
    activos_ahora: int = Field(0, description="Sessions active with time left right now")
    expirados_hoy: int = Field(0, description="Sessions created during the day now expired")
    ingresos_hoy: Decimal = Field(Decimal("0.00"), description="Amount collected during the day")

    @field_serializer("ingresos_hoy", when_used="json")
    def serialize_revenue(self, value: Decimal) -> float:
        return as_number(value)


class StatisticsResponse(CamelModel):
    success: bool = True
    date: date_type
    statistics: DailyStatistics
