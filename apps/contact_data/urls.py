"""
apps.contact_data.urls
======================
Namespaced under ``contact_data``.
"""

from django.urls import path

from . import views

app_name = "contact_data"

urlpatterns = [
    path("settings/", views.contact_settings, name="settings"),
]
