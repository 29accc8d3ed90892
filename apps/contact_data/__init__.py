"""
Public contact data application package.

Exposes admin-editable contact fields (email, phone, social profiles)
through a template tag, inline placeholders and ``lookup()``.
No logic runs on import.
"""

__all__: list[str] = ["lookup"]


def lookup(field, stream=None, **options):
    """
    Render one contact field, e.g. ``lookup("phone", link=False)``.

    Returns the output; with ``print=True`` it is also written to ``stream``.
    """
    from .apps import get_service

    return get_service().lookup(field, options, stream=stream)
