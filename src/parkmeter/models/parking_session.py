# File: src/parkmeter/models/parking_session.py
"""ParkingSession model: one paid parking window for a plate."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from parkmeter.core.db import Base
from parkmeter.models.enums import SessionStatus
from parkmeter.utils.datetime import now_utc


class ParkingSession(Base):
    """Parking payment window. A plate accumulates one row per payment."""

    __tablename__ = "parking_sessions"
    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_parking_sessions_window"),
        CheckConstraint("paid_minutes > 0", name="ck_parking_sessions_paid_minutes"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    plate: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    # Descriptive metadata
    zone: Mapped[str] = mapped_column(String(100), nullable=False, default="General")
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    meter_id: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Paid window (naive UTC)
    start_time: Mapped[datetime] = mapped_column(nullable=False)
    end_time: Mapped[datetime] = mapped_column(nullable=False, index=True)

    paid_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0.00")
    )
    payment_method: Mapped[str] = mapped_column(String(50), nullable=False, default="cash")

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=SessionStatus.ACTIVE.value,
        index=True,
    )
    fine_reference: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Row version, bumped on every write (optimistic guard for extensions)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Audit fields
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=now_utc, index=True)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=now_utc)

    @property
    def window_minutes(self) -> int:
        """Length of the paid window in whole minutes."""
        return int((self.end_time - self.start_time).total_seconds() // 60)

    @property
    def is_fined(self) -> bool:
        return self.status == SessionStatus.FINED.value

    def __repr__(self) -> str:
        return (
            f"<ParkingSession(id={self.id}, plate={self.plate}, "
            f"end_time={self.end_time}, status={self.status})>"
        )
