"""
apps.site_settings.admin
========================
Admin configuration for the host settings singleton and the option store.
"""

from __future__ import annotations

import json
import logging

from django.contrib import admin
from django.urls import NoReverseMatch, reverse
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _
from import_export.admin import ExportMixin
from solo.admin import SingletonModelAdmin

from .models import SiteOption, SiteSettings

logger = logging.getLogger(__name__)


# ------------------------------------------------------------
#  SiteSettings Admin (Singleton)
# ------------------------------------------------------------
@admin.register(SiteSettings)
class SiteSettingsAdmin(ExportMixin, SingletonModelAdmin):
    save_on_top = True

    fieldsets = (
        (_("Identity"), {"fields": ("site_name",)}),
        (_("Contact"), {"fields": ("admin_email", "public_contact_data")}),
    )
    readonly_fields = ("public_contact_data",)

    @admin.display(description=_("Public contact data"))
    def public_contact_data(self, obj):
        try:
            url = reverse("contact_data:settings")
        except NoReverseMatch:
            return "-"
        return format_html('<a href="{}">{}</a>', url, _("Edit public contact fields"))

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        logger.info(
            "SiteSettings updated by %s (admin_email=%s)",
            request.user,
            obj.admin_email or "-",
        )


# ------------------------------------------------------------
#  Option store
# ------------------------------------------------------------
@admin.register(SiteOption)
class SiteOptionAdmin(ExportMixin, admin.ModelAdmin):
    list_display = ("name", "value_preview", "updated_at")
    search_fields = ("name",)
    ordering = ("name",)
    readonly_fields = ("updated_at",)
    list_per_page = 50
    save_on_top = True

    @admin.display(description=_("Value"))
    def value_preview(self, obj):
        text = json.dumps(obj.value, ensure_ascii=False, sort_keys=True)
        if len(text) > 80:
            text = text[:77] + "..."
        return format_html("<code>{}</code>", text)

    def delete_model(self, request, obj):
        logger.info("SiteOption %s deleted by %s", obj.name, request.user)
        super().delete_model(request, obj)
