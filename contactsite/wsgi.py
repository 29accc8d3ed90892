"""
WSGI config for the contactsite project.

Exposes the WSGI callable as a module-level variable named ``application``.
The settings module can still be overridden through the environment.
"""

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "contactsite.settings")

application = get_wsgi_application()


__all__ = ["application"]
