"""
Background task scheduler for periodic statistics refresh.
Uses APScheduler to run tasks in the background without requiring external services.
"""
import logging
import atexit
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from django.conf import settings

logger = logging.getLogger(__name__)

# Global scheduler instance
scheduler = None


def refresh_statistics_job(refresher):
    """
    Background job refreshing dashboard statistics.
    StatsRefresher already keeps old values on API failures; anything else is logged here.
    """
    try:
        refresher.refresh()
    except Exception as e:
        logger.error(f"Error in scheduled statistics refresh: {str(e)}", exc_info=True)


def start_scheduler(refresher, interval_seconds=None):
    """
    Initialize and start the background scheduler.
    Returns the running scheduler, or None if it could not be started.
    """
    global scheduler

    if scheduler is not None and scheduler.running:
        logger.warning("Scheduler is already running")
        return scheduler

    if interval_seconds is None:
        interval_seconds = getattr(settings, 'STATS_REFRESH_SECONDS', 300)

    try:
        scheduler = BackgroundScheduler()
        scheduler.add_job(
            refresh_statistics_job,
            trigger=IntervalTrigger(seconds=interval_seconds),
            args=[refresher],
            id='refresh_statistics',
            name='Refresh Statistics',
            replace_existing=True,
            max_instances=1,  # Prevent overlapping runs
            coalesce=True  # Combine multiple pending executions into one
        )

        scheduler.start()
        logger.info(f"Background scheduler started, statistics refresh every {interval_seconds}s")

        atexit.register(lambda: stop_scheduler())
        return scheduler

    except Exception as e:
        logger.error(f"Failed to start scheduler: {str(e)}", exc_info=True)
        scheduler = None
        return None


def stop_scheduler():
    """
    Stop the background scheduler.
    """
    global scheduler

    if scheduler is not None and scheduler.running:
        try:
            scheduler.shutdown(wait=True)
            logger.info("Background scheduler stopped")
        except Exception as e:
            logger.error(f"Error stopping scheduler: {str(e)}", exc_info=True)
        finally:
            scheduler = None
