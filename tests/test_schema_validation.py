# File: tests/test_schema_validation.py
"""Tests for Pydantic schema validation."""

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from parkmeter.models import (
    ExtendRequest,
    MarkFinedRequest,
    ParkingSessionRead,
    PayRequest,
    VerificationResult,
)


class TestPayRequestValidation:
    """Test PayRequest schema validation."""

    def test_valid_pay_from_camel_case(self):
        request = PayRequest.model_validate(
            {
                "plate": " abc123 ",
                "minutes": 45,
                "amount": "15.50",
                "paymentMethod": "card",
                "meterId": "PM-7",
            }
        )
        assert request.plate == "ABC123"
        assert request.minutes == 45
        assert request.amount == Decimal("15.50")
        assert request.payment_method == "card"
        assert request.meter_id == "PM-7"

    def test_defaults(self):
        request = PayRequest(plate="ABC123", minutes=30)
        assert request.zone == "General"
        assert request.payment_method == "cash"
        assert request.amount == Decimal("0.00")
        assert request.location is None

    def test_blank_zone_falls_back_to_default(self):
        request = PayRequest(plate="ABC123", minutes=30, zone="   ")
        assert request.zone == "General"

    def test_missing_plate_fails(self):
        with pytest.raises(ValidationError) as exc:
            PayRequest(minutes=30)
        assert "plate is required" in str(exc.value)

    def test_missing_minutes_fails(self):
        with pytest.raises(ValidationError) as exc:
            PayRequest(plate="ABC123")
        assert "minutes must be greater than 0" in str(exc.value)

    def test_negative_amount_fails(self):
        with pytest.raises(ValidationError) as exc:
            PayRequest(plate="ABC123", minutes=30, amount=Decimal("-1"))
        assert "cannot be negative" in str(exc.value)

    def test_location_is_sanitized(self):
        request = PayRequest(plate="ABC123", minutes=30, location="<script>x</script>Av. Juárez")
        assert "<" not in request.location


class TestExtendRequestValidation:
    """Test ExtendRequest schema validation."""

    def test_valid_extend(self):
        request = ExtendRequest.model_validate({"plate": "abc123", "extraMinutes": 15, "extraAmount": 5})
        assert request.plate == "ABC123"
        assert request.extra_minutes == 15
        assert request.extra_amount == Decimal("5")

    def test_extra_amount_defaults_to_zero(self):
        request = ExtendRequest(plate="ABC123", extra_minutes=15)
        assert request.extra_amount == Decimal("0.00")

    def test_zero_extra_minutes_fails(self):
        with pytest.raises(ValidationError) as exc:
            ExtendRequest(plate="ABC123", extra_minutes=0)
        assert "extraMinutes must be greater than 0" in str(exc.value)


class TestMarkFinedRequestValidation:
    """Test MarkFinedRequest schema validation."""

    def test_reference_optional(self):
        assert MarkFinedRequest().fine_reference is None

    def test_reference_from_camel_case(self):
        request = MarkFinedRequest.model_validate({"fineReference": "  MUL-1 "})
        assert request.fine_reference == "MUL-1"


class TestReadSerialization:
    """Test outgoing JSON shape."""

    def test_session_times_rendered_as_utc(self):
        read = ParkingSessionRead(
            id=uuid4(),
            plate="ABC123",
            zone="General",
            start_time=datetime(2026, 10, 19, 15, 0),
            end_time=datetime(2026, 10, 19, 16, 0),
            paid_minutes=60,
            amount=Decimal("20.00"),
            payment_method="cash",
            status="active",
            created_at=datetime(2026, 10, 19, 15, 0),
            updated_at=datetime(2026, 10, 19, 15, 0),
        )

        data = read.model_dump(mode="json", by_alias=True)

        assert data["startTime"] == "2026-10-19T15:00:00+00:00"
        assert data["endTime"] == "2026-10-19T16:00:00+00:00"
        assert data["paidMinutes"] == 60
        assert data["amount"] == 20.0
        assert data["fineReference"] is None

    def test_verification_result_drops_unset_fields(self):
        result = VerificationResult(found=False, plate="ABC123", message="No parking payment found for this plate")

        data = result.model_dump(mode="json", by_alias=True, exclude_none=True)

        assert data == {
            "success": True,
            "found": False,
            "plate": "ABC123",
            "message": "No parking payment found for this plate",
        }
