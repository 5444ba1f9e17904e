# File: src/parkmeter/api/parking.py
"""Parking meter endpoints (verify, pay, extend, fine, listings, statistics)."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from parkmeter.core import aggregator, ledger
from parkmeter.core.db import get_db
from parkmeter.core.logging import get_logger
from parkmeter.core.store import SessionStore
from parkmeter.models import (
    ActiveListResponse,
    ExpiredListResponse,
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
    ZoneListResponse,
    ZoneRead,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/parking", tags=["parking"])


async def get_store(db: AsyncSession = Depends(get_db)) -> SessionStore:
    """FastAPI dependency wrapping the request's database session."""
    return SessionStore(db)


@router.get("/verify/{plate}", response_model=VerificationResult, response_model_exclude_none=True)
async def verify_plate(plate: str, store: SessionStore = Depends(get_store)):
    """Check whether a plate has paid time left.

    A plate whose latest window has elapsed is reported as expired and its
    session is flagged expired on the way.
    """
    return await ledger.verify(store, plate)


@router.post("/pay", response_model=PayResponse)
async def pay(request: PayRequest, store: SessionStore = Depends(get_store)):
    """Register a new parking payment starting now."""
    session, paid_time = await ledger.pay(store, request)
    return PayResponse(
        message=f"Registered {paid_time} for {session.plate}",
        paid_time=paid_time,
        session=ParkingSessionRead.model_validate(session),
    )


@router.post("/extend", response_model=ExtendResponse)
async def extend(request: ExtendRequest, store: SessionStore = Depends(get_store)):
    """Add time to the plate's active session."""
    session, total_time = await ledger.extend(store, request)
    return ExtendResponse(
        message=f"Extended {session.plate} by {request.extra_minutes} minutes",
        total_time=total_time,
        session=ParkingSessionRead.model_validate(session),
    )


@router.get("/history/{plate}", response_model=HistoryResponse)
async def plate_history(plate: str, store: SessionStore = Depends(get_store)):
    """Last 20 sessions of a plate, newest first."""
    normalized, sessions = await aggregator.history(store, plate)
    return HistoryResponse(
        plate=normalized,
        total=len(sessions),
        history=[ParkingSessionRead.model_validate(s) for s in sessions],
    )


@router.get("/active", response_model=ActiveListResponse)
async def list_active(store: SessionStore = Depends(get_store)):
    """Sessions with time left, soonest to expire first."""
    sessions = await aggregator.list_active(store)
    return ActiveListResponse(total=len(sessions), sessions=sessions)


@router.get("/expired", response_model=ExpiredListResponse)
async def list_expired(store: SessionStore = Depends(get_store)):
    """Elapsed sessions not yet fined, for agents on patrol."""
    sessions = await aggregator.list_expired(store)
    return ExpiredListResponse(total=len(sessions), sessions=sessions)


@router.patch("/{session_id}/mark-fined", response_model=MarkFinedResponse)
async def mark_fined(
    session_id: UUID,
    request: MarkFinedRequest | None = Body(None),
    store: SessionStore = Depends(get_store),
):
    """Flag a session as fined, optionally recording the ticket reference."""
    fine_reference = request.fine_reference if request else None
    session = await ledger.mark_fined(store, session_id, fine_reference)
    return MarkFinedResponse(
        message="Parking session marked as fined",
        session=ParkingSessionRead.model_validate(session),
    )


@router.get("/zones", response_model=ZoneListResponse)
async def list_zones(db: AsyncSession = Depends(get_db)):
    """Active zones and their hourly rates."""
    zones = await aggregator.list_zones(db)
    return ZoneListResponse(
        total=len(zones),
        zones=[ZoneRead.model_validate(z) for z in zones],
    )


@router.get("/statistics", response_model=StatisticsResponse)
async def statistics(
    date_param: date | None = Query(None, alias="date", description="Day in YYYY-MM-DD format"),
    store: SessionStore = Depends(get_store),
):
    """Daily counters: payments, active now, expired, revenue."""
    day, stats = await aggregator.statistics(store, day=date_param)
    return StatisticsResponse(date=day, statistics=stats)
