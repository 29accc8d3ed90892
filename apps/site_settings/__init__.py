"""
Site settings application package (host side).

Provides the SiteSettings singleton and the key-value option store that
add-on apps persist their records in. No logic runs on import.
"""

__all__: list[str] = []
