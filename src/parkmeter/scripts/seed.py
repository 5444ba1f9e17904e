"""Seed script for ParkMeter demo data: zone catalog plus a few sessions."""

import asyncio
import random
from datetime import timedelta
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from parkmeter.core.db import AsyncSessionLocal
from parkmeter.core.seed import DEFAULT_ZONES, seed_zones
from parkmeter.core.store import SessionStore
from parkmeter.models import ParkingSession, SessionStatus
from parkmeter.utils.datetime import now_utc

DEMO_PLATES = ["ABC123", "XYZ987", "JKL456", "MNO321", "PQR852", "STU741"]
PAYMENT_METHODS = ["cash", "card", "app"]


async def seed_sessions(db: AsyncSession) -> list[ParkingSession]:
    """One session per demo plate: some still running, some already elapsed."""
    store = SessionStore(db)
    now = now_utc()
    zone_names = [name for name, *_ in DEFAULT_ZONES]

    sessions = []
    for plate in DEMO_PLATES:
        minutes = random.choice([30, 60, 90, 120])
        started = now - timedelta(minutes=random.randint(0, 150))
        session = ParkingSession(
            plate=plate,
            zone=random.choice(zone_names),
            start_time=started,
            end_time=started + timedelta(minutes=minutes),
            paid_minutes=minutes,
            amount=Decimal(minutes // 30 * 5),
            payment_method=random.choice(PAYMENT_METHODS),
            status=SessionStatus.ACTIVE.value,
            version=1,
            created_at=started,
            updated_at=started,
        )
        sessions.append(await store.insert(session))

    print(f"✅ Created {len(sessions)} parking sessions")
    return sessions


async def main():
    """Run seed script."""
    print("🌱 Starting ParkMeter seed script...\n")

    async with AsyncSessionLocal() as db:
        zones = await seed_zones(db)
        sessions = await seed_sessions(db)

    print("\n🎉 Seed complete!")
    print(f"   🗺️  Zones created: {zones}")
    print(f"   🅿️  Sessions: {len(sessions)}")


def run() -> None:
    """Console entrypoint."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
