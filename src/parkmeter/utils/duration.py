# File: src/parkmeter/utils/duration.py
"""Minute arithmetic and human-readable durations for parking windows."""

import math
from datetime import datetime


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def minutes_until(end_time: datetime, now: datetime) -> int:
    """Whole minutes left until `end_time`. Zero or negative once elapsed."""
    return round_half_up((end_time - now).total_seconds() / 60)


def minutes_since(end_time: datetime, now: datetime) -> int:
    """Whole minutes elapsed since `end_time`."""
    return round_half_up((now - end_time).total_seconds() / 60)


def format_duration(minutes: int) -> str:
    """
    Format a number of minutes for display.

    Examples:
        45  -> "45 minutos"
        60  -> "1 hora"
        90  -> "1 hora 30 min"
        120 -> "2 horas"

    Only hours are pluralized. Callers pass absolute values for elapsed time.
    """
    if minutes < 60:
        return f"{minutes} minutos"

    hours, mins = divmod(minutes, 60)
    label = f"{hours} hora{'s' if hours > 1 else ''}"
    if mins == 0:
        return label
    return f"{label} {mins} min"
