from django.core.management.base import BaseCommand

from listing.screens import all_screens


class Command(BaseCommand):
    help = 'List the registered list screens and their filters'

    def handle(self, *args, **options):
        for screen in all_screens():
            self.stdout.write(self.style.SUCCESS(f"{screen.name}") + f"  {screen.endpoint}")
            server_side = [key for key in screen.filter_keys if key not in screen.client_side_keys]
            self.stdout.write(f"    filters: {', '.join(server_side) or '-'}")
            if screen.client_side_keys:
                self.stdout.write(f"    client-side: {', '.join(screen.client_side_keys)}")
