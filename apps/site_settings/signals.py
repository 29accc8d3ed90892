from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from . import admin_contact
from .models import SiteOption, SiteSettings
from .options import option_cache_key


def clear_site_settings_cache(names=None):
    """
    Invalidate cached options and the process-local admin address.

    - Options use 'site_option::<name>'.
    - With ``names=None`` every stored option is dropped from the cache.
    """
    if names is None:
        names = SiteOption.objects.values_list("name", flat=True)
    cache.delete_many([option_cache_key(n) for n in names])
    admin_contact.reset_cache()


@receiver(post_save, sender=SiteOption)
@receiver(post_delete, sender=SiteOption)
def invalidate_option_cache(sender, instance, **kwargs):
    """
    Drop the cached value whenever an option row changes.
    """
    cache.delete(option_cache_key(instance.name))


@receiver(post_save, sender=SiteSettings)
@receiver(post_delete, sender=SiteSettings)
def invalidate_site_settings_cache(sender, **kwargs):
    admin_contact.reset_cache()
