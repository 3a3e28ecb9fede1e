#!/usr/bin/env python3
"""
Create, read, update and delete one reservation against the configured MongoDB
"""

import asyncio


async def check_reservation_flow():
    from app.database import get_database, ping, close_connection, utcnow
    from app.models.reservation import ReservationStore

    print("Starting reservation flow check...")
    db = get_database()
    store = ReservationStore(db)
    try:
        await ping(db)
        print("- Database connection successful")

        reservation = await store.create({
            "name": "Test User",
            "phone": "96170123456",
            "branch": "Clemenceau",
            "time": "8:00 PM",
            "status": "pending",
            "createdAt": utcnow(),
        })
        reservation_id = reservation["_id"]
        print(f"- Test reservation created: {reservation_id}")

        found = await store.get(reservation_id)
        print(f"- Retrieved reservation: {'Success' if found else 'Failed'}")

        updated = await store.update(reservation_id, {"status": "confirmed", "otp": "XND123456"})
        print(f"- Updated reservation status: {updated['status']}")

        await store.delete(reservation_id)
        print("- Cleaned up test data")

        indexes = await store.reservations.index_information()
        print(f"- Collection indexes: {sorted(indexes)}")
    except Exception as e:
        print(f"Check failed: {e}")
        return 1
    finally:
        await close_connection()

    print("\nAll checks completed successfully!")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(check_reservation_flow()))
