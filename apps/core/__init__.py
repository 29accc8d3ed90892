"""
Shared helpers for the project's apps.

Keep this file free of side effects so imports remain predictable
in management commands, migrations, and tests.
"""

__all__: list[str] = []
