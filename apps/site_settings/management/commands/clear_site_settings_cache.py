from apps.site_settings.signals import clear_site_settings_cache
from django.core.management.base import BaseCommand


class Command(BaseCommand):
    help = "Clear cached site options and the cached administrative address."

    def add_arguments(self, parser):
        parser.add_argument(
            "names",
            nargs="*",
            help="Option names to clear. Clears every stored option when omitted.",
        )

    def handle(self, *args, **options):
        clear_site_settings_cache(options["names"] or None)
        self.stdout.write(self.style.SUCCESS("Site settings caches cleared."))
