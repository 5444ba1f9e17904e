"""Factory classes for creating test objects."""

import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from parkmeter.models.enums import SessionStatus
from parkmeter.models.parking_session import ParkingSession
from parkmeter.models.zone import ParkingZone
from parkmeter.utils.datetime import now_utc


class ParkingSessionFactory:
    """Factory for creating ParkingSession rows directly, bypassing the ledger."""

    @staticmethod
    async def create(
        session: AsyncSession,
        plate: str = "ABC123",
        minutes: int = 60,
        start_time: Optional[datetime] = None,
        ends_in: Optional[timedelta] = None,
        amount: Decimal = Decimal("10.00"),
        status: str = SessionStatus.ACTIVE.value,
        zone: str = "General",
        payment_method: str = "cash",
        fine_reference: Optional[str] = None,
        created_at: Optional[datetime] = None,
        **kwargs,
    ) -> ParkingSession:
        """Create a test session.

        `ends_in` places the end of the window relative to now (negative for
        an already elapsed window); the start is derived from `minutes`.
        """
        now = now_utc()
        if ends_in is not None:
            end_time = now + ends_in
            start_time = end_time - timedelta(minutes=minutes)
        else:
            start_time = start_time or now
            end_time = start_time + timedelta(minutes=minutes)

        parking_session = ParkingSession(
            id=kwargs.get("id", uuid.uuid4()),
            plate=plate,
            zone=zone,
            location=kwargs.get("location"),
            meter_id=kwargs.get("meter_id"),
            start_time=start_time,
            end_time=end_time,
            paid_minutes=minutes,
            amount=amount,
            payment_method=payment_method,
            status=status,
            fine_reference=fine_reference,
            version=kwargs.get("version", 1),
            created_at=created_at or start_time,
            updated_at=created_at or start_time,
        )

        session.add(parking_session)
        await session.commit()
        await session.refresh(parking_session)

        return parking_session


class ParkingZoneFactory:
    """Factory for creating ParkingZone objects."""

    @staticmethod
    async def create(
        session: AsyncSession,
        name: str = "Centro",
        hourly_rate: Decimal = Decimal("15.00"),
        is_active: bool = True,
        **kwargs,
    ) -> ParkingZone:
        zone = ParkingZone(
            id=kwargs.get("id", uuid.uuid4()),
            name=name,
            description=kwargs.get("description"),
            hourly_rate=hourly_rate,
            max_minutes=kwargs.get("max_minutes"),
            is_active=is_active,
        )

        session.add(zone)
        await session.commit()
        await session.refresh(zone)

        return zone
