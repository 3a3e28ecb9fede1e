#!/usr/bin/env python3
"""
Run one database health check against the configured MongoDB and print the report
"""

import asyncio
import json


async def check_monitoring():
    from app.database import get_database, close_connection
    from app.logging_config import configure_logging
    from app.maintenance import DatabaseMaintenance
    from app.models.reservation import ReservationStore
    from app.notifications import get_notification_manager

    configure_logging(log_format="console")
    maintenance = DatabaseMaintenance(
        ReservationStore(get_database()),
        get_notification_manager(),
    )
    try:
        report = await maintenance.monitor_health()
    finally:
        await close_connection()

    if report is None:
        print("Database stats unavailable; see the log for details.")
        return 1

    print("Monitoring Results:")
    print(json.dumps(report.model_dump(by_alias=True), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(check_monitoring()))
