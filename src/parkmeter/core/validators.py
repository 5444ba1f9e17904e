# File: src/parkmeter/core/validators.py
"""Reusable validation utilities for parking request fields."""

import re
from decimal import Decimal, InvalidOperation

PLATE_MAX_LENGTH = 20

# paid_minutes is a 32-bit INTEGER column; also keeps end_time within datetime range
MAX_MINUTES = 2_147_483_647


def normalize_plate(value: str | None) -> str:
    """
    Normalize a license plate for storage and lookup.

    Args:
        value: Plate as typed by the driver or agent

    Returns:
        Trimmed, uppercase plate

    Raises:
        ValueError: If the plate is missing, blank or too long
    """
    if value is None or not str(value).strip():
        raise ValueError("plate is required")

    cleaned = str(value).strip().upper()

    if len(cleaned) > PLATE_MAX_LENGTH:
        raise ValueError(f"plate cannot exceed {PLATE_MAX_LENGTH} characters")

    return cleaned


def validate_positive_minutes(value: int | None, field_name: str = "minutes") -> int:
    """
    Ensure a minute count is present, strictly positive and storable.

    Raises:
        ValueError: If value is missing, zero, negative or above MAX_MINUTES
    """
    if value is None or value <= 0:
        raise ValueError(f"{field_name} must be greater than 0")
    if value > MAX_MINUTES:
        raise ValueError(f"{field_name} cannot exceed {MAX_MINUTES}")
    return value


def validate_currency(
    value: Decimal | float | str, max_value: Decimal = Decimal("99999999.99")
) -> Decimal:
    """
    Validate currency input.

    Args:
        value: Currency value to validate
        max_value: Maximum allowed value (default matches NUMERIC(10, 2))

    Returns:
        Validated Decimal

    Raises:
        ValueError: If value is negative, exceeds max, or is not a number
    """
    try:
        decimal_value = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid currency format: {value}") from e

    if not decimal_value.is_finite():
        raise ValueError(f"Invalid currency format: {value}")

    if decimal_value < 0:
        raise ValueError("Currency value cannot be negative")

    if decimal_value > max_value:
        raise ValueError(f"Currency value exceeds maximum allowed: {max_value}")

    return decimal_value


def clean_text(value: str | None, max_length: int = 255) -> str | None:
    """
    Strip HTML tags and surrounding whitespace from free-form text.

    Returns:
        Cleaned text, or None if nothing is left

    Raises:
        ValueError: If the cleaned text is longer than max_length
    """
    if not value:
        return None

    cleaned = re.sub(r"<[^>]+>", "", value).strip()
    if not cleaned:
        return None

    if len(cleaned) > max_length:
        raise ValueError(f"Text cannot exceed {max_length} characters")

    return cleaned
