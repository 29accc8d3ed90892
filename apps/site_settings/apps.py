from django.apps import AppConfig


class SiteSettingsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.site_settings"  # full Python path
    label = "site_settings"  # short label
    verbose_name = "Site Settings"

    def ready(self):
        """
        Connect cache invalidation for options and the singleton.
        """
        import apps.site_settings.signals  # noqa: F401
