"""
Public Contact Data project package
-----------------------------------

Keep this file free of side effects: it only exposes static metadata so
manage.py, ASGI and WSGI boot without importing Django early.

Rules:
    • DO NOT import Django or project modules here.
    • DO NOT perform I/O, logging or settings access.
"""

__all__ = ["__version__", "__author__", "__description__"]

__version__ = "2012.2.21"

__author__ = "Public Contact Data maintainers"
__description__ = "Admin-editable public contact fields with template placeholders."
