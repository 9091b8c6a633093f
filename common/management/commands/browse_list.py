"""
Management command to page through a list screen from the terminal.

Usage:
    python manage.py browse_list rent_payments --filter status=PENDING --quick LAST_WEEK
    python manage.py browse_list expenses --filter payment_method=CASH --pages 3
    python manage.py browse_list tenants --location 4 --filter search=rahul
"""

from django.core.management.base import BaseCommand, CommandError

from core.exceptions import ValidationError
from core.store import Action, AppContext
from listing.controller import ListController
from listing.screens import get_screen


class Command(BaseCommand):
    help = 'Fetch a list screen with filters and print the reconciled rows'

    def add_arguments(self, parser):
        parser.add_argument('screen', help='Screen name (see list_screens)')
        parser.add_argument(
            '--filter',
            action='append',
            default=[],
            metavar='KEY=VALUE',
            help='Filter to apply; may be repeated',
        )
        parser.add_argument('--quick', help='Quick date filter, e.g. LAST_WEEK or THIS_MONTH')
        parser.add_argument('--pages', type=int, default=1, help='Number of pages to load')
        parser.add_argument('--limit', type=int, help='Page size override')
        parser.add_argument('--location', type=int, help='PG location id to scope requests to')

    def handle(self, *args, **options):
        try:
            screen = get_screen(options['screen'])
        except KeyError as e:
            raise CommandError(str(e.args[0]))

        context = AppContext.from_settings()
        if options['location']:
            context.dispatch(Action.SCOPE_UPDATED, pg_location_id=options['location'])

        controller = ListController(
            screen,
            context=context,
            page_size=options['limit'],
            reload_on_scope_change=False,
        )

        try:
            for raw in options['filter']:
                key, sep, value = raw.partition('=')
                if not sep:
                    raise CommandError(f"Filter '{raw}' must look like KEY=VALUE")
                controller.set_filter(key.strip(), value)
            if options['quick']:
                controller.set_filter('quick_filter', options['quick'])
        except ValidationError as e:
            raise CommandError(e.message)

        self.stdout.write(f"\n{'='*60}")
        self.stdout.write(f"  {screen.title.upper()} ({screen.endpoint})")
        self.stdout.write(f"{'='*60}\n")
        self.stdout.write(f"Query: {controller.query_params()}\n")

        controller.load()
        for _ in range(max(options['pages'], 1) - 1):
            if not controller.load_more():
                break

        for alert in controller.alerts.drain():
            self.stdout.write(self.style.ERROR(f"  ! [{alert.severity}] {alert.title}: {alert.message}"))
            for field, message in (alert.field_errors or {}).items():
                self.stdout.write(self.style.ERROR(f"      {field}: {message}"))

        columns = screen.columns or (screen.key_field,)
        for item in controller.items:
            row = '  '.join(f"{column}={item.get(column, '')}" for column in columns)
            self.stdout.write(f"  - {row}")

        summary = controller.summary()
        self.stdout.write(f"\n{'='*60}")
        self.stdout.write("  SUMMARY")
        self.stdout.write(f"{'='*60}")
        self.stdout.write(f"  State: {summary['state']}")
        self.stdout.write(f"  Pages loaded: {summary['page']}")
        self.stdout.write(f"  Rows shown: {summary['shown']} of {summary['total']}")
        self.stdout.write(f"  More pages: {'yes' if summary['has_more'] else 'no'}")
        self.stdout.write(f"  Active filters: {summary['active_filters']}")
        self.stdout.write(f"{'='*60}\n")
        controller.close()
