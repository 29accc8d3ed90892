from __future__ import annotations

import functools
import logging

from django.conf import settings
from django.db import DatabaseError

from apps.site_settings.models import SiteSettings

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=1)
def get_admin_email() -> str:
    """
    The site's administrative contact address, read once per process.

    Order: CONTACT_DATA["ADMIN_EMAIL"] (checked by the contact_data app before
    calling this), SiteSettings.admin_email, first ADMINS entry,
    DEFAULT_FROM_EMAIL.
    """
    try:
        address = (SiteSettings.get_solo().admin_email or "").strip()
    except DatabaseError:
        # Table may not exist yet during migrations.
        logger.debug("SiteSettings unavailable, using settings fallbacks", exc_info=True)
        address = ""
    if address:
        return address

    admins = getattr(settings, "ADMINS", None) or []
    for entry in admins:
        candidate = entry[1] if isinstance(entry, (list, tuple)) else entry
        if candidate:
            return str(candidate).strip()

    return (getattr(settings, "DEFAULT_FROM_EMAIL", "") or "").strip()


def reset_cache() -> None:
    """Used by signals to re-read the address after SiteSettings changes."""
    get_admin_email.cache_clear()
