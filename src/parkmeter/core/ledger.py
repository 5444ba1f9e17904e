# File: src/parkmeter/core/ledger.py
"""Session ledger: the parking session state machine.

States: active -> expired -> fined (fined reachable from any state, terminal).

- pay:        creates a new active session for a plate
- verify:     reads the plate's latest session; expires it lazily once elapsed
- extend:     pushes the end time of the plate's latest active session
- mark_fined: moves any session to fined

There is no background sweeper. A session whose window elapsed stays
flagged active until a read (verify or the expired listing) notices it, and
until then it can still be extended.
"""

from datetime import datetime, timedelta
from uuid import UUID

from parkmeter.core.errors import ConflictError, NotFoundError, StoreError, ValidationError
from parkmeter.core.logging import get_logger
from parkmeter.core.store import SessionStore
from parkmeter.core.validators import MAX_MINUTES, normalize_plate, validate_currency
from parkmeter.models.enums import SessionStatus
from parkmeter.models.parking_session import ParkingSession
from parkmeter.models.parking_session_schemas import (
    ExtendRequest,
    PayRequest,
    VerificationResult,
)
from parkmeter.utils.datetime import now_utc, to_utc_naive
from parkmeter.utils.duration import format_duration, minutes_until

logger = get_logger(__name__)

# Optimistic retries for concurrent extensions of the same session
EXTEND_MAX_ATTEMPTS = 3


def _resolve_now(now: datetime | None) -> datetime:
    return to_utc_naive(now) if now is not None else now_utc()


def require_plate(plate: str | None) -> str:
    """Normalize a plate taken from a path or query parameter."""
    try:
        return normalize_plate(plate)
    except ValueError as exc:
        raise ValidationError(str(exc), details={"field": "plate"}) from exc


async def pay(
    store: SessionStore, request: PayRequest, now: datetime | None = None
) -> tuple[ParkingSession, str]:
    """Register a new paid window starting now.

    Prior sessions of the same plate are left untouched; the one ending last
    is what verify consults.

    Returns:
        (created session, human-readable paid duration)
    """
    now = _resolve_now(now)

    session = ParkingSession(
        plate=request.plate,
        zone=request.zone,
        location=request.location,
        meter_id=request.meter_id,
        start_time=now,
        end_time=now + timedelta(minutes=request.minutes),
        paid_minutes=request.minutes,
        amount=request.amount,
        payment_method=request.payment_method,
        status=SessionStatus.ACTIVE.value,
        version=1,
        created_at=now,
        updated_at=now,
    )
    await store.insert(session)

    logger.info(
        "ledger.pay",
        session_id=str(session.id),
        plate=session.plate,
        minutes=session.paid_minutes,
        end_time=session.end_time.isoformat(),
    )
    return session, format_duration(request.minutes)


async def _expire_lazily(store: SessionStore, session: ParkingSession, now: datetime) -> bool:
    """Flip an elapsed session from active to expired.

    Best effort: the caller already knows the window is over, so a failed
    write is logged and reported as not applied.
    """
    try:
        written = await store.update(
            session.id,
            {"status": SessionStatus.EXPIRED.value, "updated_at": now},
            ParkingSession.status == SessionStatus.ACTIVE.value,
        )
    except StoreError as exc:
        logger.warning(
            "ledger.verify.expire_failed",
            session_id=str(session.id),
            error=exc.message,
        )
        return False
    return written > 0


async def verify(
    store: SessionStore, plate: str | None, now: datetime | None = None
) -> VerificationResult:
    """Check whether `plate` has paid time left right now.

    Valid only while the rounded remaining minutes are strictly positive.
    """
    plate = require_plate(plate)
    now = _resolve_now(now)

    session = await store.latest_by_plate(plate)
    if session is None:
        logger.info("ledger.verify.not_found", plate=plate)
        return VerificationResult(
            found=False,
            plate=plate,
            message="No parking payment found for this plate",
        )

    details = dict(
        found=True,
        plate=plate,
        session_id=session.id,
        zone=session.zone,
        location=session.location,
        meter_id=session.meter_id,
        start_time=session.start_time,
        end_time=session.end_time,
        paid_minutes=session.paid_minutes,
        amount=session.amount,
        payment_method=session.payment_method,
    )

    remaining = minutes_until(session.end_time, now)
    if remaining > 0:
        logger.info("ledger.verify.valid", plate=plate, remaining_minutes=remaining)
        return VerificationResult(
            **details,
            valid=True,
            expired=False,
            status=session.status,
            remaining_minutes=remaining,
            remaining_time=format_duration(remaining),
        )

    expired_minutes = abs(remaining)
    status = session.status
    if status == SessionStatus.ACTIVE.value and await _expire_lazily(store, session, now):
        status = SessionStatus.EXPIRED.value

    logger.info("ledger.verify.expired", plate=plate, expired_minutes=expired_minutes, status=status)
    return VerificationResult(
        **details,
        valid=False,
        expired=True,
        status=status,
        expired_minutes=expired_minutes,
        expired_time=format_duration(expired_minutes),
    )


async def extend(
    store: SessionStore, request: ExtendRequest, now: datetime | None = None
) -> tuple[ParkingSession, str]:
    """Add minutes (and money) to the plate's latest active session.

    The session stays active even when the new end time is already past.
    The write only lands if the row version is unchanged since it was read;
    a concurrent writer forces a re-read, up to EXTEND_MAX_ATTEMPTS times.

    Returns:
        (updated session, human-readable total paid duration)

    Raises:
        NotFoundError: plate has no active session
        ValidationError: the extended totals would not fit the session columns
        ConflictError: every attempt lost against a concurrent write
    """
    now = _resolve_now(now)

    for attempt in range(1, EXTEND_MAX_ATTEMPTS + 1):
        session = await store.latest_by_plate(request.plate, status=SessionStatus.ACTIVE.value)
        if session is None:
            raise NotFoundError(
                "No active parking session found for this plate",
                details={"plate": request.plate},
            )

        total_minutes = session.paid_minutes + request.extra_minutes
        if total_minutes > MAX_MINUTES:
            raise ValidationError(
                f"Total paid time cannot exceed {MAX_MINUTES} minutes",
                details={"field": "extraMinutes", "paid_minutes": session.paid_minutes},
            )
        try:
            total_amount = validate_currency(session.amount + request.extra_amount)
        except ValueError as exc:
            raise ValidationError(str(exc), details={"field": "extraAmount"}) from exc

        patch = {
            "end_time": session.end_time + timedelta(minutes=request.extra_minutes),
            "paid_minutes": total_minutes,
            "amount": total_amount,
            "updated_at": now,
        }
        written = await store.update(
            session.id,
            patch,
            ParkingSession.version == session.version,
            ParkingSession.status == SessionStatus.ACTIVE.value,
        )
        if written:
            break

        logger.warning(
            "ledger.extend.conflict",
            session_id=str(session.id),
            plate=request.plate,
            attempt=attempt,
        )
    else:
        raise ConflictError(
            "Parking session was modified concurrently, please retry",
            details={"plate": request.plate, "attempts": EXTEND_MAX_ATTEMPTS},
        )

    updated = await store.get(session.id)
    if updated is None:
        raise NotFoundError(
            "No active parking session found for this plate",
            details={"plate": request.plate},
        )

    logger.info(
        "ledger.extend",
        session_id=str(updated.id),
        plate=updated.plate,
        extra_minutes=request.extra_minutes,
        end_time=updated.end_time.isoformat(),
    )
    return updated, format_duration(updated.paid_minutes)


async def mark_fined(
    store: SessionStore,
    session_id: UUID,
    fine_reference: str | None = None,
    now: datetime | None = None,
) -> ParkingSession:
    """Move a session to fined, whatever its current state.

    Fining twice overwrites the fine reference.
    """
    now = _resolve_now(now)

    written = await store.update(
        session_id,
        {
            "status": SessionStatus.FINED.value,
            "fine_reference": fine_reference,
            "updated_at": now,
        },
    )
    session = await store.get(session_id) if written else None
    if session is None:
        raise NotFoundError(
            f"Parking session {session_id} not found",
            details={"resource": "ParkingSession", "resource_id": str(session_id)},
        )

    logger.info(
        "ledger.mark_fined",
        session_id=str(session_id),
        plate=session.plate,
        fine_reference=fine_reference,
    )
    return session
