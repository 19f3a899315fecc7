"""Background scheduler for the daily user deactivation that runs schedule.run_pending() in a loop."""

import threading
from typing import Optional

import schedule

from elnursery.app import ElnurseryApp
from elnursery.utils.logger import get_logger

logger = get_logger(__name__)

_stop = threading.Event()
_thread: Optional[threading.Thread] = None


def _run_deactivation(app: ElnurseryApp) -> None:
    try:
        count = app.run_maintenance()
        logger.info("Daily deactivation finished", deactivated=count)
    except Exception as e:
        # Keep the job scheduled for the next day
        logger.exception("Daily deactivation failed", error=str(e))


def _scheduler_loop():
    """Run schedule.run_pending() in a loop"""
    logger.info("Maintenance scheduler loop started")

    while not _stop.is_set():
        try:
            schedule.run_pending()
        except Exception as e:
            logger.error("Error in maintenance scheduler loop", error=str(e))
        # Check every minute for scheduled tasks
        _stop.wait(60)

    logger.info("Maintenance scheduler loop stopped")


def start_maintenance_scheduler(app: ElnurseryApp) -> None:
    """Start the maintenance scheduler background thread"""
    global _thread

    if _thread is not None:
        logger.warning("Maintenance scheduler already running")
        return

    schedule_time = app.settings.maintenance.schedule_time
    schedule.every().day.at(schedule_time).do(_run_deactivation, app).tag("maintenance")
    logger.info("Daily deactivation scheduled", at=schedule_time)

    _stop.clear()
    _thread = threading.Thread(
        target=_scheduler_loop,
        daemon=True,
        name="maintenance-scheduler",
    )
    _thread.start()
    logger.info("Maintenance scheduler background thread started")


def stop_maintenance_scheduler() -> None:
    """Stop the maintenance scheduler"""
    global _thread

    _stop.set()
    if _thread is not None:
        _thread.join(timeout=5)
        _thread = None

    schedule.clear("maintenance")
    logger.info("Maintenance scheduler stopped and cleared")
