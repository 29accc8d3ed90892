"""
apps.contact_data.views
=======================
Staff settings page for the public contact fields.

✓ GET renders one input per registered field
✓ POST normalizes + stores, then redirects (PRG)
✓ Normalizer warnings surface through django.contrib.messages
"""

from __future__ import annotations

import logging

from django.contrib import admin, messages
from django.contrib.admin.views.decorators import staff_member_required
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.utils.translation import gettext as _
from django.views.decorators.http import require_http_methods

from .apps import get_service
from .forms import ContactDataForm
from .normalizer import LEVEL_ERROR

log = logging.getLogger(__name__)

_MESSAGE_LEVELS = {
    LEVEL_ERROR: messages.ERROR,
}


@staff_member_required
@require_http_methods(["GET", "POST"])
def contact_settings(request: HttpRequest) -> HttpResponse:
    service = get_service()

    if request.method == "POST":
        form = ContactDataForm(request.POST, service=service)
        if form.is_valid():
            result = form.save(user=request.user)
            for warning in result.warnings:
                messages.add_message(
                    request,
                    _MESSAGE_LEVELS.get(warning.level, messages.INFO),
                    warning.message,
                    extra_tags=f"contact-data-{warning.field}",
                )
            messages.success(request, _("Public contact data saved."))
            return redirect("contact_data:settings")
        log.debug("Contact data form invalid: %s", form.errors.as_json())
    else:
        form = ContactDataForm(service=service)

    return render(
        request,
        "contact_data/settings.html",
        {
            **admin.site.each_context(request),
            "title": _("Public contact data"),
            "form": form,
            "placeholders": [service.placeholder_help(key) for key in service.registry.keys()],
        },
    )
