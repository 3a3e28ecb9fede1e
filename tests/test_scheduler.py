"""Tests for the maintenance scheduler"""

import asyncio
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.maintenance.scheduler import (
    MaintenanceScheduler,
    is_archive_due,
    is_cleanup_due,
    sunday_first_weekday,
)

SUNDAY_4AM = datetime(2026, 10, 18, 4, 0)
TUESDAY_3AM = datetime(2026, 10, 20, 3, 0)


def fake_maintenance():
    maintenance = MagicMock()
    maintenance.monitor_health = AsyncMock(return_value=None)
    maintenance.cleanup_old_reservations = AsyncMock()
    maintenance.archive_reservations = AsyncMock()
    return maintenance


def test_weekday_counts_from_sunday():
    assert sunday_first_weekday(SUNDAY_4AM) == 0
    assert sunday_first_weekday(datetime(2026, 10, 19)) == 1
    assert sunday_first_weekday(datetime(2026, 10, 24)) == 6


def test_cleanup_due_only_on_the_hour():
    assert is_cleanup_due(TUESDAY_3AM, 3)
    assert not is_cleanup_due(datetime(2026, 10, 20, 3, 1), 3)
    assert not is_cleanup_due(datetime(2026, 10, 20, 4, 0), 3)


def test_archive_due_only_on_sunday():
    assert is_archive_due(SUNDAY_4AM, 4)
    assert not is_archive_due(datetime(2026, 10, 19, 4, 0), 4)
    assert not is_archive_due(datetime(2026, 10, 18, 4, 30), 4)


@pytest.mark.asyncio
async def test_start_runs_one_immediate_health_check():
    maintenance = fake_maintenance()
    scheduler = MaintenanceScheduler(maintenance, health_interval=3600, poll_interval=3600)

    scheduler.start()
    await asyncio.sleep(0.01)
    await scheduler.stop()

    maintenance.monitor_health.assert_awaited_once()
    maintenance.cleanup_old_reservations.assert_not_awaited()
    maintenance.archive_reservations.assert_not_awaited()


@pytest.mark.asyncio
async def test_health_check_repeats_on_interval():
    maintenance = fake_maintenance()
    scheduler = MaintenanceScheduler(maintenance, health_interval=0.01, poll_interval=3600)

    scheduler.start()
    await asyncio.sleep(0.06)
    await scheduler.stop()

    assert maintenance.monitor_health.await_count >= 3


@pytest.mark.asyncio
async def test_daily_cleanup_fires_at_configured_hour():
    maintenance = fake_maintenance()
    scheduler = MaintenanceScheduler(
        maintenance,
        cleanup_hour=3,
        archive_hour=4,
        health_interval=3600,
        poll_interval=0.01,
        clock=lambda: TUESDAY_3AM,
    )

    scheduler.start()
    await asyncio.sleep(0.05)
    await scheduler.stop()

    assert maintenance.cleanup_old_reservations.await_count >= 1
    maintenance.archive_reservations.assert_not_awaited()


@pytest.mark.asyncio
async def test_weekly_archive_fires_on_sunday():
    maintenance = fake_maintenance()
    scheduler = MaintenanceScheduler(
        maintenance,
        cleanup_hour=3,
        archive_hour=4,
        health_interval=3600,
        poll_interval=0.01,
        clock=lambda: SUNDAY_4AM,
    )

    scheduler.start()
    await asyncio.sleep(0.05)
    await scheduler.stop()

    assert maintenance.archive_reservations.await_count >= 1
    maintenance.cleanup_old_reservations.assert_not_awaited()


@pytest.mark.asyncio
async def test_failing_job_keeps_its_timer_alive():
    maintenance = fake_maintenance()
    maintenance.cleanup_old_reservations = AsyncMock(side_effect=RuntimeError("boom"))
    scheduler = MaintenanceScheduler(
        maintenance,
        health_interval=3600,
        poll_interval=0.01,
        clock=lambda: TUESDAY_3AM,
    )

    scheduler.start()
    await asyncio.sleep(0.06)
    await scheduler.stop()

    assert maintenance.cleanup_old_reservations.await_count >= 2


@pytest.mark.asyncio
async def test_stop_cancels_timers_and_is_idempotent():
    maintenance = fake_maintenance()
    scheduler = MaintenanceScheduler(maintenance, health_interval=3600, poll_interval=3600)

    scheduler.start()
    scheduler.start()
    assert scheduler.running
    tasks = list(scheduler._tasks)
    assert len(tasks) == 4

    await scheduler.stop()
    await scheduler.stop()

    assert not scheduler.running
    assert all(task.done() for task in tasks)
