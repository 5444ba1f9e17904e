"""Pydantic schemas for the zone catalog."""

from decimal import Decimal
from uuid import UUID

from pydantic import ConfigDict, field_serializer
from pydantic.alias_generators import to_camel

from parkmeter.models.parking_session_schemas import CamelModel, as_number


class ZoneRead(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: UUID
    name: str
    description: str | None = None
    hourly_rate: Decimal
    max_minutes: int | None = None

    @field_serializer("hourly_rate", when_used="json")
    def serialize_rate(self, value: Decimal) -> float:
        return as_number(value)


class ZoneListResponse(CamelModel):
    success: bool = True
    total: int
    zones: list[ZoneRead]
