"""
URL configuration for the contactsite project.

  - Django admin (host settings, option store)
  - Public contact data settings page
"""

from __future__ import annotations

from django.contrib import admin
from django.urls import include, path

admin.site.site_header = "Administration"
admin.site.site_title = "Admin Portal"
admin.site.index_title = "Site Configuration"


urlpatterns = [
    path("admin/", admin.site.urls),
    path(
        "contact-data/",
        include(("apps.contact_data.urls", "contact_data"), namespace="contact_data"),
    ),
]
