"""
Listing app configuration
"""

from django.apps import AppConfig
from django.utils.module_loading import autodiscover_modules


class ListingConfig(AppConfig):
    name = 'listing'
    verbose_name = 'List Screens'

    def ready(self):
        """Import every app's screens module so screens register themselves"""
        autodiscover_modules('screens')
