"""
Management command to refresh dashboard statistics.

Usage:
    python manage.py refresh_stats
    python manage.py refresh_stats --every 60
"""
import json
import time

from django.core.management.base import BaseCommand

from common.scheduler import start_scheduler, stop_scheduler
from common.stats import StatsRefresher


class Command(BaseCommand):
    help = 'Fetch statistics once, or keep refreshing them in the background'

    def add_arguments(self, parser):
        parser.add_argument(
            '--every',
            type=int,
            help='Keep refreshing every N seconds until interrupted',
        )

    def handle(self, *args, **options):
        refresher = StatsRefresher()
        updated = refresher.refresh()
        self._print(refresher, updated)

        if not options['every']:
            return

        if start_scheduler(refresher, interval_seconds=options['every']) is None:
            self.stdout.write(self.style.ERROR("Could not start the scheduler"))
            return

        self.stdout.write(self.style.WARNING(f"Refreshing every {options['every']}s, Ctrl+C to stop"))
        try:
            while True:
                time.sleep(options['every'])
                self._print(refresher, list(refresher.snapshot()))
        except KeyboardInterrupt:
            pass
        finally:
            stop_scheduler()

    def _print(self, refresher, updated):
        for name, data in refresher.snapshot().items():
            marker = '+' if name in updated else '='
            self.stdout.write(f"  {marker} {name}: {json.dumps(data, default=str)}")
        missing = set(refresher.endpoints) - set(refresher.snapshot())
        for name in sorted(missing):
            self.stdout.write(self.style.WARNING(f"  ? {name}: unavailable"))
