"""Seed the default zone catalog for new installations."""

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkmeter.models.zone import ParkingZone

DEFAULT_ZONES = [
    ("Centro", "Historic center, high turnover", Decimal("15.00"), 120),
    ("General", "Default zone for unassigned meters", Decimal("10.00"), None),
    ("Mercado", "Market streets", Decimal("12.00"), 180),
    ("Zona Hospital", "Hospital perimeter", Decimal("8.00"), 240),
]


async def seed_zones(db: AsyncSession) -> int:
    """Create the default zones if the catalog is empty. Returns how many were created."""
    result = await db.execute(select(ParkingZone).limit(1))
    if result.scalar_one_or_none() is not None:
        print("✅ Zones already seeded, skipping...")
        return 0

    zones = [
        ParkingZone(name=name, description=description, hourly_rate=rate, max_minutes=max_minutes)
        for name, description, rate, max_minutes in DEFAULT_ZONES
    ]

    db.add_all(zones)
    await db.commit()

    print(f"✅ Seeded {len(zones)} default zones")
    return len(zones)
