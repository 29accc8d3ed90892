from __future__ import annotations

from typing import Any, Dict

from django.conf import settings

DEFAULTS: Dict[str, Any] = {
    "OPTION_NAME": "public_contact_data",
    "PLACEHOLDER_PREFIX": "public_",
    "ADMIN_EMAIL": None,
    "OPTION_CACHE_TIMEOUT": 300,
}


def get_setting(name: str) -> Any:
    """Read one key of the ``CONTACT_DATA`` setting, falling back to DEFAULTS."""
    configured = getattr(settings, "CONTACT_DATA", None) or {}
    return configured.get(name, DEFAULTS[name])
