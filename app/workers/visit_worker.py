"""
Visit Rollover Background Worker
Fires the daily visit rollover once per local day at the configured time
"""

import asyncio
import logging
from datetime import date, datetime
from typing import Optional

from ..config import (
    VISIT_ROLLOVER_HOUR,
    VISIT_ROLLOVER_MINUTE,
    VISIT_SCHEDULER_INTERVAL_SECONDS,
)
from ..services.visit_automation import manage_automatic_visits

logger = logging.getLogger(__name__)


def should_run_rollover(
    now: datetime,
    last_run_date: Optional[date],
    hour: int = VISIT_ROLLOVER_HOUR,
    minute: int = VISIT_ROLLOVER_MINUTE,
) -> bool:
    """
    True once the wall clock has reached today's rollover time and the
    rollover has not run yet today.
    """
    if last_run_date == now.date():
        return False
    return (now.hour, now.minute) >= (hour, minute)


async def run_visit_worker(interval_seconds: int = VISIT_SCHEDULER_INTERVAL_SECONDS):
    """
    Main worker loop - checks the clock every tick
    """
    logger.info(
        f"🚀 Starting visit worker (rollover at {VISIT_ROLLOVER_HOUR:02d}:{VISIT_ROLLOVER_MINUTE:02d})"
    )

    last_run_date = None
    while True:
        try:
            now = datetime.now()
            if should_run_rollover(now, last_run_date):
                last_run_date = now.date()
                # Blocking DB work runs in a thread so the event loop stays free
                summary = await asyncio.to_thread(manage_automatic_visits, now)
                if summary is None:
                    logger.warning("⚠️ Visit rollover did not complete, see errors above")

            await asyncio.sleep(interval_seconds)

        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"❌ Error in visit worker loop: {e}")
            await asyncio.sleep(interval_seconds)
