#!/usr/bin/env python3
"""
Seed script to create demo reservations
"""

import asyncio
from datetime import timedelta


DEMO_GUESTS = [
    ("Ana", "Restrepo", "ana.restrepo@example.com", "+573001112233", "double", 2),
    ("Carlos", "Gómez", "carlos.gomez@example.com", "+573004445566", "single", 1),
    ("Lucía", "Martínez", "lucia.martinez@example.com", "+573007778899", "suite", 3),
    ("Jorge", "Pérez", "jorge.perez@example.com", "+573002223344", "family", 4),
]


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select, func

    from hotelbook.config import settings
    from hotelbook.database import SessionLocal, engine, Base
    from hotelbook.models.reservation import Reservation
    from hotelbook.schemas.reservation import ReservationCreate
    from hotelbook.services.lifecycle import ReservationLifecycle
    from hotelbook.services.store import ReservationStore

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        result = await db.execute(select(func.count(Reservation.id)))
        if result.scalar():
            print("Demo data already exists. Skipping...")
            return

        lifecycle = ReservationLifecycle(
            ReservationStore(db),
            status_policy=settings.status_policy,
            tz_name=settings.hotel_timezone,
        )
        today = lifecycle.today()

        print("Creating demo reservations...")

        created = []
        for offset, (first, last, email, phone, room_type, occupants) in enumerate(DEMO_GUESTS):
            check_in = today + timedelta(days=offset * 3)
            reservation = await lifecycle.create(ReservationCreate(
                guest_first_name=first,
                guest_last_name=last,
                email=email,
                phone=phone,
                check_in_date=check_in.isoformat(),
                check_out_date=(check_in + timedelta(days=2)).isoformat(),
                room_type=room_type,
                occupant_count=occupants,
            ))
            created.append(reservation)
            print(f"Created reservation {reservation.id} for {first} {last} ({room_type})")

        await lifecycle.transition(created[1].id, "completed")
        await lifecycle.cancel(created[2].id)
        print("Marked one reservation completed and one cancelled")

    print(f"""
Demo data created successfully!

Reservations: {len(created)} created
Hotel: {settings.hotel_name}
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
