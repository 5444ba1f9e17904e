# File: src/parkmeter/core/aggregator.py
"""Read views derived from the parking session store.

Views compute remaining/elapsed minutes on the fly against the clock. Only
list_expired writes, and only the active -> expired edge for rows it lists.
"""

from datetime import date, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from parkmeter.core.errors import StoreError, ValidationError
from parkmeter.core.ledger import require_plate
from parkmeter.core.logging import get_logger
from parkmeter.core.store import SessionStore
from parkmeter.models.enums import SessionStatus
from parkmeter.models.parking_session import ParkingSession
from parkmeter.models.parking_session_schemas import (
    ActiveSessionRead,
    DailyStatistics,
    ExpiredSessionRead,
    ParkingSessionRead,
)
from parkmeter.models.zone import ParkingZone
from parkmeter.utils.datetime import local_day_bounds_utc, now_utc, to_utc_naive, today_local
from parkmeter.utils.duration import format_duration, minutes_since, minutes_until

logger = get_logger(__name__)

EXPIRED_LIST_LIMIT = 50
HISTORY_LIMIT = 20


def _session_fields(session: ParkingSession) -> dict[str, Any]:
    return {name: getattr(session, name) for name in ParkingSessionRead.model_fields}


async def list_active(
    store: SessionStore, now: datetime | None = None
) -> list[ActiveSessionRead]:
    """Sessions flagged active whose window has not ended, soonest to expire first."""
    now = to_utc_naive(now) if now else now_utc()

    sessions = await store.select(
        ParkingSession.status == SessionStatus.ACTIVE.value,
        ParkingSession.end_time >= now,
        order_by=(ParkingSession.end_time.asc(),),
    )

    result = []
    for session in sessions:
        remaining = minutes_until(session.end_time, now)
        result.append(
            ActiveSessionRead(
                **_session_fields(session),
                remaining_minutes=remaining,
                remaining_time=format_duration(remaining),
            )
        )
    return result


async def list_expired(
    store: SessionStore, now: datetime | None = None
) -> list[ExpiredSessionRead]:
    """Elapsed, not yet fined sessions, most recently ended first (max 50).

    Rows still flagged active are moved to expired in a single update.
    """
    now = to_utc_naive(now) if now else now_utc()

    sessions = await store.select(
        ParkingSession.end_time < now,
        ParkingSession.status.in_([SessionStatus.ACTIVE.value, SessionStatus.EXPIRED.value]),
        order_by=(ParkingSession.end_time.desc(),),
        limit=EXPIRED_LIST_LIMIT,
    )

    result = []
    stale_ids = []
    for session in sessions:
        elapsed = minutes_since(session.end_time, now)
        if session.status == SessionStatus.ACTIVE.value:
            stale_ids.append(session.id)
        result.append(
            ExpiredSessionRead(
                **_session_fields(session),
                expired_minutes=elapsed,
                expired_time=format_duration(elapsed),
            )
        )

    if stale_ids:
        try:
            expired = await store.update_many(
                stale_ids,
                {"status": SessionStatus.EXPIRED.value, "updated_at": now},
                ParkingSession.status == SessionStatus.ACTIVE.value,
            )
            logger.info("aggregator.expired.flagged", count=expired)
        except StoreError as exc:
            logger.warning("aggregator.expired.flag_failed", error=exc.message)

    return result


async def history(store: SessionStore, plate: str | None) -> tuple[str, list[ParkingSession]]:
    """Last 20 sessions of a plate, newest first."""
    plate = require_plate(plate)
    sessions = await store.select(
        ParkingSession.plate == plate,
        order_by=(ParkingSession.created_at.desc(),),
        limit=HISTORY_LIMIT,
    )
    return plate, sessions


async def statistics(
    store: SessionStore, day: date | None = None, now: datetime | None = None
) -> tuple[date, DailyStatistics]:
    """Counters for one local calendar day.

    The four figures are independent queries: an active session may well
    have been created on an earlier day.
    """
    day = day or today_local()
    now = to_utc_naive(now) if now else now_utc()
    try:
        day_start, day_end = local_day_bounds_utc(day)
    except OverflowError as exc:
        raise ValidationError(f"date {day.isoformat()} is out of range", details={"field": "date"}) from exc

    created_that_day = (
        ParkingSession.created_at >= day_start,
        ParkingSession.created_at < day_end,
    )

    payments = await store.count(*created_that_day)
    active_now = await store.count(
        ParkingSession.status == SessionStatus.ACTIVE.value,
        ParkingSession.end_time >= now,
    )
    expired = await store.count(
        ParkingSession.status == SessionStatus.EXPIRED.value,
        *created_that_day,
    )
    revenue = await store.sum_amount(*created_that_day)

    return day, DailyStatistics(
        pagos_hoy=payments,
        activos_ahora=active_now,
        expirados_hoy=expired,
        ingresos_hoy=revenue,
    )


async def list_zones(db: AsyncSession) -> list[ParkingZone]:
    """Active zones of the catalog, alphabetically."""
    stmt = select(ParkingZone).where(ParkingZone.is_active.is_(True)).order_by(ParkingZone.name)
    try:
        result = await db.execute(stmt)
    except SQLAlchemyError as exc:
        raise StoreError(f"Store select failed: {type(exc).__name__}") from exc
    return list(result.scalars().all())
