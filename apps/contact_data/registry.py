"""
apps.contact_data.registry
==========================

Recognized contact fields and their labels.

✓ Ordered: insertion order is settings-form and diagnostic order
✓ Re-registering a key keeps its position and replaces the label
✓ An empty label hides the field
✓ Frozen on first read; later registration is a configuration error
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from django.utils.translation import gettext_lazy as _

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContactField:
    key: str
    label: str

    @property
    def enabled(self) -> bool:
        return bool(str(self.label or "").strip())


def default_fields() -> List[ContactField]:
    return [
        ContactField("email", _("Public mail address")),
        ContactField("phone", _("Public phone number")),
        ContactField("googleplus", _("Google Plus")),
        ContactField("facebook", _("FaceBook")),
        ContactField("twitter", _("Twitter")),
    ]


class FieldRegistryFrozen(RuntimeError):
    """Raised when a field is registered after the registry was first read."""


class FieldRegistry:
    def __init__(self, fields: Optional[Iterable[ContactField]] = None):
        self._fields: Dict[str, ContactField] = {}
        self._frozen = False
        for field in fields if fields is not None else default_fields():
            self.register(field.key, field.label)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register(self, key: str, label) -> ContactField:
        """Add a field, or replace the label of an existing one."""
        key = (key or "").strip()
        if not key:
            raise ValueError("Contact field key must be a non-empty string.")
        if self._frozen:
            raise FieldRegistryFrozen(
                f"Cannot register contact field {key!r}: the registry is already in use."
            )
        field = ContactField(key, label)
        self._fields[key] = field
        logger.debug("Contact field registered: %s (enabled=%s)", key, field.enabled)
        return field

    def freeze(self) -> None:
        self._frozen = True

    def reopen(self) -> None:
        """Allow registration again (re-configuration, tests)."""
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Reads (freeze on first use)
    # ------------------------------------------------------------------
    def fields(self) -> List[ContactField]:
        self._frozen = True
        return [f for f in self._fields.values() if f.enabled]

    def list(self) -> List[Tuple[str, str]]:
        return [(f.key, f.label) for f in self.fields()]

    def keys(self) -> List[str]:
        return [f.key for f in self.fields()]

    def has(self, key: str) -> bool:
        self._frozen = True
        field = self._fields.get(key)
        return field is not None and field.enabled

    def __contains__(self, key: str) -> bool:
        return self.has(key)
