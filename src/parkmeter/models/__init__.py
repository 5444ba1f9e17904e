"""Domain models package."""

from parkmeter.models.enums import SessionStatus
from parkmeter.models.parking_session import ParkingSession
from parkmeter.models.parking_session_schemas import (
    ActiveListResponse,
    ActiveSessionRead,
    DailyStatistics,
    ExpiredListResponse,
    ExpiredSessionRead,
    ExtendRequest,
    ExtendResponse,
    HistoryResponse,
    MarkFinedRequest,
    MarkFinedResponse,
    ParkingSessionRead,
    PayRequest,
    PayResponse,
    StatisticsResponse,
    VerificationResult,
)
from parkmeter.models.zone import ParkingZone
from parkmeter.models.zone_schemas import ZoneListResponse, ZoneRead

__all__ = [
    "ActiveListResponse",
    "ActiveSessionRead",
    "DailyStatistics",
    "ExpiredListResponse",
    "ExpiredSessionRead",
    "ExtendRequest",
    "ExtendResponse",
    "HistoryResponse",
    "MarkFinedRequest",
    "MarkFinedResponse",
    "ParkingSession",
    "ParkingSessionRead",
    "ParkingZone",
    "PayRequest",
    "PayResponse",
    "SessionStatus",
    "StatisticsResponse",
    "VerificationResult",
    "ZoneListResponse",
    "ZoneRead",
]
