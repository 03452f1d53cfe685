"""Background scheduler for session housekeeping."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from animecards.db.session import session_scope
from animecards.services.sessions import SessionManager

if TYPE_CHECKING:
    from animecards.core.context import AppContext

logger = logging.getLogger(__name__)

PURGE_JOB_ID = "purge-expired-sessions"


def build_scheduler() -> AsyncIOScheduler:
    return AsyncIOScheduler()


def start_scheduler(context: AppContext) -> None:
    scheduler = context.scheduler
    if not context.settings.session_purge_enabled:
        return
    schedule_session_purge_job(context)
    if not scheduler.running:
        scheduler.start()
        logger.info("Scheduler started")


def stop_scheduler(context: AppContext) -> None:
    if context.scheduler.running:
        context.scheduler.shutdown(wait=False)


def schedule_session_purge_job(context: AppContext) -> None:
    interval = context.settings.session_purge_interval_seconds
    trigger = IntervalTrigger(seconds=interval)
    context.scheduler.add_job(
        purge_expired_sessions, trigger=trigger, id=PURGE_JOB_ID, args=[context], replace_existing=True
    )
    logger.info("Scheduled session purge job every %s seconds", interval)


async def purge_expired_sessions(context: AppContext) -> int:
    """Delete expired session rows; returns how many were removed."""

    async with session_scope(context.session_factory) as session:
        purged = await SessionManager(session, context.settings).purge_expired()
        await session.commit()
    return purged
