#!/usr/bin/env python3
"""
Seed script to create demo reservations across branches and ages
"""

import asyncio
from datetime import timedelta


DEMO_RESERVATIONS = [
    # (name, phone, branch, time, status, age)
    ("Maya Haddad", "96170123456", "Clemenceau", "8:00 PM", "pending", timedelta(hours=2)),
    ("Karim Saade", "96171234567", "Jal El Dib", "7:30 PM", "confirmed", timedelta(hours=10)),
    ("Rana Khoury", "9613123456", "Kfarehbeb", "1:00 PM", "pending", timedelta(hours=30)),
    ("Fadi Nassar", "96176543210", "Bliss", "9:15 PM", "confirmed", timedelta(days=31)),
    ("Lea Aoun", "96103987654", "Clemenceau", "6:45 PM", "cancelled", timedelta(days=45)),
    ("Jad Mansour", "96181112233", "Bliss", "12:30 PM", "confirmed", timedelta(days=75)),
]


async def seed_demo_data():
    """Seed demo data for development"""
    from app.database import get_database, ensure_indexes, close_connection, utcnow
    from app.models.reservation import ReservationStore

    db = get_database()
    await ensure_indexes(db)
    store = ReservationStore(db)

    existing = await store.list({"name": "Maya Haddad"})
    if existing:
        print("Demo data already exists. Skipping...")
        await close_connection()
        return

    now = utcnow()
    for name, phone, branch, time, status, age in DEMO_RESERVATIONS:
        reservation = await store.create({
            "name": name,
            "phone": phone,
            "branch": branch,
            "time": time,
            "status": status,
            "createdAt": now - age,
        })
        print(f"Created reservation: {name} at {branch} ({status}, ID: {reservation['_id']})")

    await close_connection()

    print(f"""
Demo data created successfully!

Reservations: {len(DEMO_RESERVATIONS)} created
  - 2 recent (kept by cleanup)
  - 1 abandoned pending (removed by daily cleanup)
  - 2 completed older than 30 days (removed by daily cleanup)
  - 1 older than 60 days (moved by weekly archiving)
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
