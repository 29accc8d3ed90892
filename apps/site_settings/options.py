"""
apps.site_settings.options
==========================

Key-value option storage for add-on apps.

✔ One JSON value per option name
✔ Read-through Django cache (``site_option::<name>``)
✔ Cache invalidated by model signals (see signals.py)
✔ OptionStore adapter so consumers can be handed a store explicitly
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from django.core.cache import cache

from .models import SiteOption

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "site_option"
DEFAULT_TTL_SECONDS = 300

# Cached marker for "option row does not exist".
_MISSING = "__site_option_missing__"


def option_cache_key(name: str) -> str:
    return f"{CACHE_KEY_PREFIX}::{(name or '').strip()}"


def get_option(name: str, default: Any = None, *, timeout: int = DEFAULT_TTL_SECONDS) -> Any:
    """
    Return the stored value for ``name`` or ``default`` when absent.
    """
    key = option_cache_key(name)
    cached = cache.get(key)
    if cached == _MISSING:
        return default
    if cached is not None:
        return cached

    row = SiteOption.objects.filter(name=name).only("value").first()
    if row is None:
        cache.set(key, _MISSING, timeout=timeout)
        return default

    cache.set(key, row.value, timeout=timeout)
    return row.value


def update_option(name: str, value: Any) -> SiteOption:
    """Create or replace the option. Last writer wins."""
    option, created = SiteOption.objects.update_or_create(
        name=name, defaults={"value": value}
    )
    logger.debug("Option %s %s", name, "created" if created else "updated")
    return option


def delete_option(name: str) -> bool:
    """Delete the option; returns whether a row existed."""
    deleted = 0
    # Per-instance delete so post_delete fires and the cache entry is dropped.
    for option in SiteOption.objects.filter(name=name):
        option.delete()
        deleted += 1
    cache.delete(option_cache_key(name))
    if deleted:
        logger.info("Option %s deleted", name)
    return bool(deleted)


class OptionStore:
    """
    Storage collaborator bound to the module functions above.

    ``get_record`` returns ``None`` for an absent record.
    """

    def __init__(self, *, timeout: int = DEFAULT_TTL_SECONDS):
        self.timeout = timeout

    def get_record(self, name: str) -> Optional[Any]:
        return get_option(name, None, timeout=self.timeout)

    def set_record(self, name: str, value: Any) -> None:
        update_option(name, value)

    def delete_record(self, name: str) -> bool:
        return delete_option(name)
