from django.core.management.base import BaseCommand

from apps.contact_data.apps import get_service


class Command(BaseCommand):
    help = "Delete the stored public contact data record. This cannot be undone."

    def add_arguments(self, parser):
        parser.add_argument(
            "--noinput",
            "--no-input",
            action="store_false",
            dest="interactive",
            help="Do not prompt for confirmation.",
        )

    def handle(self, *args, **options):
        service = get_service()
        if options["interactive"]:
            answer = input(
                f"This deletes the '{service.option_name}' record permanently. Type 'yes' to continue: "
            )
            if answer.strip().lower() != "yes":
                self.stdout.write(self.style.WARNING("Deactivation cancelled."))
                return

        if service.deactivate():
            self.stdout.write(self.style.SUCCESS("Public contact data deleted."))
        else:
            self.stdout.write("No public contact data was stored.")
