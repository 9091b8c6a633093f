from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class CommonConfig(AppConfig):
    name = 'common'

    def ready(self):
        """
        Start the statistics refresh scheduler when enabled in settings.
        Disabled by default; `manage.py refresh_stats --every N` starts it explicitly.
        """
        from django.conf import settings
        enable_scheduler = getattr(settings, 'ENABLE_BACKGROUND_SCHEDULER', False)

        if enable_scheduler:
            try:
                from .scheduler import start_scheduler
                from .stats import StatsRefresher
                start_scheduler(StatsRefresher())
                logger.info("Background task scheduler initialized")
            except Exception as e:
                logger.error(f"Failed to initialize scheduler: {str(e)}", exc_info=True)
