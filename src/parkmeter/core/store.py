# File: src/parkmeter/core/store.py
"""Record store for parking sessions.

Every write is a single statement followed by a commit. SQLAlchemy failures
are rolled back and re-raised as StoreError so no transition is half applied.
"""

from contextlib import asynccontextmanager
from decimal import Decimal
from typing import Any, AsyncIterator, Sequence
from uuid import UUID

from sqlalchemy import ColumnElement, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from parkmeter.core.errors import StoreError
from parkmeter.core.logging import get_logger
from parkmeter.models.parking_session import ParkingSession

logger = get_logger(__name__)


class SessionStore:
    """Insert/update/select/count access to the parking_sessions table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncIterator[None]:
        """Translate database failures into StoreError after rolling back."""
        try:
            yield
        except SQLAlchemyError as exc:
            await self.db.rollback()
            reason = str(getattr(exc, "orig", None) or type(exc).__name__)
            logger.error("store.failed", operation=operation, error=reason)
            raise StoreError(f"Store {operation} failed: {reason}") from exc

    async def insert(self, session: ParkingSession) -> ParkingSession:
        """Persist a new session and return it with its generated id."""
        async with self._guard("insert"):
            self.db.add(session)
            await self.db.commit()
            await self.db.refresh(session)
        return session

    async def update(
        self,
        session_id: UUID,
        patch: dict[str, Any],
        *conditions: ColumnElement[bool],
    ) -> int:
        """
        Apply `patch` to one row, optionally guarded by extra conditions.

        The row version is always bumped. Returns the number of rows written
        (0 when the id is unknown or a condition did not hold).
        """
        return await self.update_many([session_id], patch, *conditions)

    async def update_many(
        self,
        session_ids: Sequence[UUID],
        patch: dict[str, Any],
        *conditions: ColumnElement[bool],
    ) -> int:
        """Apply the same patch to several rows in one statement."""
        if not session_ids:
            return 0

        stmt = (
            update(ParkingSession)
            .where(ParkingSession.id.in_(list(session_ids)), *conditions)
            .values(**patch, version=ParkingSession.version + 1)
            .execution_options(synchronize_session=False)
        )
        async with self._guard("update"):
            result = await self.db.execute(stmt)
            await self.db.commit()
        return result.rowcount

    async def get(self, session_id: UUID) -> ParkingSession | None:
        """Fetch one session by id, always reloading it from the database."""
        stmt = (
            select(ParkingSession)
            .where(ParkingSession.id == session_id)
            .execution_options(populate_existing=True)
        )
        async with self._guard("select"):
            result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def select(
        self,
        *filters: ColumnElement[bool],
        order_by: Sequence[Any] = (),
        limit: int | None = None,
    ) -> list[ParkingSession]:
        """Fetch sessions matching every filter."""
        stmt = (
            select(ParkingSession)
            .where(*filters)
            .order_by(*order_by)
            .execution_options(populate_existing=True)
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        async with self._guard("select"):
            result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count(self, *filters: ColumnElement[bool]) -> int:
        stmt = select(func.count(ParkingSession.id)).where(*filters)
        async with self._guard("count"):
            result = await self.db.execute(stmt)
        return result.scalar_one() or 0

    async def sum_amount(self, *filters: ColumnElement[bool]) -> Decimal:
        stmt = select(func.coalesce(func.sum(ParkingSession.amount), 0)).where(*filters)
        async with self._guard("sum"):
            result = await self.db.execute(stmt)
        return Decimal(str(result.scalar_one() or 0))

    async def latest_by_plate(
        self, plate: str, status: str | None = None
    ) -> ParkingSession | None:
        """
        Session with the greatest end_time for `plate`.

        This is the authoritative session for verification. Ties on end_time
        fall back to the most recently created row.
        """
        filters = [ParkingSession.plate == plate]
        if status is not None:
            filters.append(ParkingSession.status == status)

        rows = await self.select(
            *filters,
            order_by=(ParkingSession.end_time.desc(), ParkingSession.created_at.desc()),
            limit=1,
        )
        return rows[0] if rows else None
