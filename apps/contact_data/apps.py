from django.apps import AppConfig, apps as django_apps
from django.utils.translation import gettext_lazy as _


class ContactDataConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.contact_data"
    label = "contact_data"
    verbose_name = _("Public Contact Data")

    service = None

    def ready(self):
        """
        Build the contact data service once per process.

        - Field receivers registered by other apps' ready() run first, so
          they can hook ``collect_contact_fields`` before it is sent here.
        - No database access: the record and the admin address are read
          lazily on first use.
        """
        self.service = self.build_service()

    def build_service(self):
        from apps.site_settings.admin_contact import get_admin_email
        from apps.site_settings.options import OptionStore

        from .conf import get_setting
        from .service import ContactDataService

        configured_admin = get_setting("ADMIN_EMAIL")

        def admin_email() -> str:
            return configured_admin or get_admin_email()

        return ContactDataService(
            store=OptionStore(timeout=get_setting("OPTION_CACHE_TIMEOUT")),
            admin_email=admin_email,
            option_name=get_setting("OPTION_NAME"),
            placeholder_prefix=get_setting("PLACEHOLDER_PREFIX"),
        )


def get_service():
    """The process-wide service built in ``ContactDataConfig.ready()``."""
    return django_apps.get_app_config("contact_data").service
