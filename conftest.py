import os

import django
from django.conf import settings


def pytest_configure():
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "contactsite.settings")
    os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret")
    os.environ.setdefault("CONTACT_DATA_ADMIN_EMAIL", "")
    if not settings.configured:
        django.setup()
