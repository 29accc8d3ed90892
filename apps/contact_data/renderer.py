"""
apps.contact_data.renderer
==========================

Turns a field key plus render options into output markup.

Formatting precedence (first match wins):
    1. ``pattern``  every ``%value%`` is replaced with the value
    2. ``link``     ``<a href='mailto:|tel:|value'>value</a>``
    3. bare value

``before``/``after`` wrap non-empty output only. A pattern is applied to an
empty value too. Stored values are HTML-escaped; ``before``, ``after`` and
``pattern`` are author markup and are used as given.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Callable, Mapping, Optional

from django.utils.html import escape, format_html
from django.utils.safestring import SafeString, mark_safe
from django.utils.translation import gettext as _

from .registry import FieldRegistry

logger = logging.getLogger(__name__)

PATTERN_TOKEN = "%value%"

LINK_SCHEMES = {
    "email": "mailto:",
    "phone": "tel:",
}

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


def to_bool(value: Any, default: bool = False) -> bool:
    """Booleans from Python callers or from placeholder attribute strings."""
    if value is None:
        return default
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        return default
    return bool(value)


@dataclass(frozen=True)
class RenderOptions:
    before: str = ""
    after: str = ""
    link: bool = True
    print: bool = False
    pattern: Optional[str] = None

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]] = None) -> "RenderOptions":
        """Fill defaults for omitted options; unknown keys are ignored."""
        if isinstance(options, RenderOptions):
            return options
        options = dict(options or {})
        known = {f.name for f in fields(cls)}
        ignored = set(options) - known
        if ignored:
            logger.debug("Ignoring unknown render options: %s", ", ".join(sorted(ignored)))

        defaults = cls()
        pattern = options.get("pattern")
        if pattern is False or pattern == "":
            pattern = None
        return cls(
            before=str(options.get("before") or ""),
            after=str(options.get("after") or ""),
            link=to_bool(options.get("link"), defaults.link),
            print=to_bool(options.get("print"), defaults.print),
            pattern=str(pattern) if pattern is not None else None,
        )


def obfuscate_email(address: str) -> str:
    """Entity-encode ``@`` and ``.``: readable in a browser, not in raw HTML."""
    return address.replace("@", "&#64;").replace(".", "&#46;")


def link_value(value: str, field_key: str) -> str:
    """Wrap an already escaped value in a protocol-appropriate link."""
    if value == "":
        return value
    safe = mark_safe(value)
    return format_html("<a href='{}{}'>{}</a>", LINK_SCHEMES.get(field_key, ""), safe, safe)


def invalid_field_message(field_key: str, allowed) -> str:
    return _("Invalid field: %(field)s. Allowed fields: %(allowed)s.") % {
        "field": escape(field_key),
        "allowed": ", ".join(allowed),
    }


class FieldRenderer:
    """
    Stateless apart from its collaborators: the registry, a callable that
    loads the current settings record, and one for the admin address.
    """

    def __init__(
        self,
        registry: FieldRegistry,
        load_record: Callable[[], Optional[Mapping[str, Any]]],
        admin_email: Callable[[], str],
    ):
        self.registry = registry
        self.load_record = load_record
        self.admin_email = admin_email

    def stored_value(self, field_key: str) -> str:
        record = self.load_record()
        if not isinstance(record, Mapping):
            return ""
        value = record.get(field_key)
        return "" if value is None else str(value)

    def resolve_value(self, field_key: str) -> str:
        """Escaped display value, with the email fallback and obfuscation."""
        value = escape(self.stored_value(field_key))
        if field_key != "email":
            return value
        if value == "":
            value = escape(self.admin_email() or "")
        return obfuscate_email(value)

    def render(self, field_key: str, options: Any = None) -> SafeString:
        opts = RenderOptions.from_mapping(options)

        if not self.registry.has(field_key):
            logger.warning("Unknown contact field requested: %s", field_key)
            return mark_safe(invalid_field_message(field_key, self.registry.keys()))

        data = self.resolve_value(field_key)
        if opts.pattern:
            data = opts.pattern.replace(PATTERN_TOKEN, data)
        elif opts.link:
            data = link_value(data, field_key)

        if data == "":
            return mark_safe("")
        return mark_safe(opts.before + data + opts.after)
