"""Background task scheduler using APScheduler."""

import logging
from datetime import datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from crew_api.config import get_settings

logger = logging.getLogger(__name__)

# Global scheduler instance
_scheduler: AsyncIOScheduler | None = None


async def contract_sweep_job() -> None:
    """Background job archiving employees whose contract has ended."""
    from crew_api.database import async_session_maker
    from crew_api.models.domain.user import SYSTEM_USER
    from crew_api.repositories.store import SQLRecordStore
    from crew_api.services.activity_service import ActivityLogger
    from crew_api.services.lifecycle_service import LifecycleService

    logger.info("Starting scheduled contract sweep")

    async with async_session_maker() as session:
        try:
            store = SQLRecordStore(session)
            service = LifecycleService(store, ActivityLogger(store))
            result = await service.load(SYSTEM_USER)
            await session.commit()
            if result.warning:
                logger.warning("Contract sweep not fully saved: %s", result.warning)
            logger.info("Contract sweep completed: %d archived", len(result.archived))
        except Exception as e:
            logger.error("Contract sweep failed: %s", e)
            await session.rollback()


async def trash_retention_job() -> None:
    """Background job destroying trashed employees past the retention window."""
    from crew_api.database import async_session_maker
    from crew_api.models.domain.user import SYSTEM_USER
    from crew_api.repositories.store import SQLRecordStore
    from crew_api.services.activity_service import ActivityLogger
    from crew_api.services.lifecycle_service import LifecycleService

    settings = get_settings()
    logger.info("Checking trash retention (%d days)", settings.trash_retention_days)

    async with async_session_maker() as session:
        try:
            store = SQLRecordStore(session)
            service = LifecycleService(store, ActivityLogger(store))
            await service.load(SYSTEM_USER)
            result = await service.purge_expired_trash(SYSTEM_USER, settings.trash_retention_days)
            await session.commit()
            logger.info("Trash retention check completed: %d purged", len(result.purged_ids))
        except Exception as e:
            logger.error("Trash retention check failed: %s", e)
            await session.rollback()


async def start_scheduler() -> None:
    """Start the background task scheduler."""
    global _scheduler

    settings = get_settings()
    _scheduler = AsyncIOScheduler()

    # Contract sweep
    _scheduler.add_job(
        contract_sweep_job,
        trigger=IntervalTrigger(minutes=settings.sweep_interval_minutes),
        id="contract_sweep",
        name="Archive ended contracts",
        replace_existing=True,
        next_run_time=datetime.now(),  # Run immediately on startup
    )

    # Trash retention (daily, early morning)
    _scheduler.add_job(
        trash_retention_job,
        trigger=CronTrigger(hour=3, minute=0),
        id="trash_retention",
        name="Purge expired trash",
        replace_existing=True,
    )

    _scheduler.start()
    logger.info("Background scheduler started")


async def stop_scheduler() -> None:
    """Stop the background task scheduler."""
    global _scheduler

    if _scheduler:
        _scheduler.shutdown(wait=False)
        _scheduler = None
        logger.info("Background scheduler stopped")
