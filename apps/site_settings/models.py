"""
Host site settings and option storage.

✓ SiteSettings: global singleton carrying the site identity and the
  administrative contact address
✓ SiteOption: opaque key → JSON value store used by add-on apps
"""

from __future__ import annotations

import logging

from django.core.validators import RegexValidator
from django.db import models
from django.utils.translation import gettext_lazy as _
from solo.models import SingletonModel

logger = logging.getLogger(__name__)

_OPTION_NAME_VALIDATOR = RegexValidator(
    regex=r"^[a-z0-9_.\-]+$",
    message=_("Option names may contain lowercase letters, digits, '_', '.' and '-'."),
)


# =====================================================================
# GLOBAL SITE SETTINGS (SINGLETON)
# =====================================================================
class SiteSettings(SingletonModel):
    """
    Global site-wide configuration.
    """

    site_name = models.CharField(max_length=100, default="Site")
    admin_email = models.EmailField(
        blank=True,
        default="",
        help_text=_("Administrative contact address, used as a fallback for public addresses."),
    )

    class Meta:
        verbose_name = _("Site Settings")
        verbose_name_plural = _("Site Settings")

    def __str__(self) -> str:
        return self.site_name or "Site Settings"


# =====================================================================
# OPTION STORE
# =====================================================================
class SiteOption(models.Model):
    """
    One named, opaque value. Add-ons persist their whole configuration
    record under a single well-known name.
    """

    name = models.CharField(
        max_length=191,
        unique=True,
        validators=[_OPTION_NAME_VALIDATOR],
    )
    value = models.JSONField(default=dict, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name = _("Site Option")
        verbose_name_plural = _("Site Options")

    def __str__(self) -> str:
        return self.name
