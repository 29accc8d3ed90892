"""
apps.contact_data.service
=========================

``ContactDataService`` ties the registry, normalizer and renderer to the
host collaborators (option store, placeholder registry, admin address).

One instance is built by ``ContactDataConfig.ready()`` and handed to the
template tags, views and management commands.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, Dict, Mapping, Optional

from apps.core.utils.logging import log_event

from .normalizer import NormalizationResult, normalize_settings
from .registry import FieldRegistry
from .renderer import FieldRenderer, RenderOptions
from .shortcodes import ShortcodeRegistry
from .signals import collect_contact_fields, contact_data_saved

logger = logging.getLogger(__name__)


class ContactDataService:
    def __init__(
        self,
        *,
        store,
        admin_email: Callable[[], str],
        registry: Optional[FieldRegistry] = None,
        shortcodes: Optional[ShortcodeRegistry] = None,
        option_name: str = "public_contact_data",
        placeholder_prefix: str = "public_",
        collect_fields: bool = True,
    ):
        self.store = store
        self.admin_email = admin_email
        self.option_name = option_name
        self.placeholder_prefix = placeholder_prefix
        self.registry = registry if registry is not None else FieldRegistry()
        self.shortcodes = shortcodes if shortcodes is not None else ShortcodeRegistry()

        if collect_fields:
            collect_contact_fields.send(sender=self.__class__, registry=self.registry)

        self.renderer = FieldRenderer(self.registry, self.record, self.admin_email)
        self.register_placeholders()

    # ------------------------------------------------------------------
    # Record access
    # ------------------------------------------------------------------
    def record(self) -> Dict[str, str]:
        """Current settings record; an absent or malformed record is empty."""
        data = self.store.get_record(self.option_name)
        if not isinstance(data, Mapping):
            return {}
        return dict(data)

    def fields(self):
        return self.registry.fields()

    def initial_values(self) -> Dict[str, str]:
        """Values for the settings form; an empty email shows the admin address."""
        data = self.record()
        values = {key: str(data.get(key) or "") for key in self.registry.keys()}
        if "email" in values and values["email"] == "":
            values["email"] = self.admin_email() or ""
        return values

    # ------------------------------------------------------------------
    # Save path
    # ------------------------------------------------------------------
    def save(self, submitted: Mapping[str, Any], *, user=None) -> NormalizationResult:
        """Normalize a submission, merge it into the stored record and persist."""
        previous = self.record()
        result = normalize_settings(submitted, previous)
        self.store.set_record(self.option_name, result.record)

        log_event(
            logger,
            "info",
            "Contact data saved by %s (%d warning(s))",
            user or "system",
            len(result.warnings),
            option=self.option_name,
            fields=sorted(submitted.keys()),
        )
        for warning in result.warnings:
            log_event(
                logger,
                "info",
                "Contact data field %s rewritten on save",
                warning.field,
                field=warning.field,
                severity=warning.level,
            )

        contact_data_saved.send(sender=self.__class__, service=self, result=result, user=user)
        return result

    # ------------------------------------------------------------------
    # Lookup dispatcher
    # ------------------------------------------------------------------
    def lookup(self, field_key: str, options: Any = None, *, stream=None) -> str:
        """
        Render ``field_key``. With ``print`` set the output is also written
        to ``stream`` (default: stdout).
        """
        opts = RenderOptions.from_mapping(options)
        out = self.renderer.render(field_key, opts)
        if opts.print:
            (stream if stream is not None else sys.stdout).write(out)
        return out

    # ------------------------------------------------------------------
    # Placeholders
    # ------------------------------------------------------------------
    def placeholder_tag(self, field_key: str) -> str:
        return f"{self.placeholder_prefix}{field_key}"

    def make_placeholder_handler(self, field_key: str):
        def handler(attrs: Mapping[str, str]) -> str:
            options = dict(attrs or {})
            # The placeholder engine inserts the output itself.
            options["print"] = False
            return self.lookup(field_key, options)

        handler.__name__ = f"placeholder_{field_key}"
        return handler

    def register_placeholders(self) -> None:
        for field_key in self.registry.keys():
            self.shortcodes.add(
                self.placeholder_tag(field_key), self.make_placeholder_handler(field_key)
            )

    def expand_placeholders(self, content: str) -> str:
        return self.shortcodes.expand(content)

    def placeholder_help(self, field_key: str) -> str:
        return f"[{self.placeholder_tag(field_key)}]"

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def deactivate(self) -> bool:
        """Delete the stored record. Irreversible."""
        deleted = self.store.delete_record(self.option_name)
        log_event(
            logger,
            "warning",
            "Contact data record %s deleted on deactivation (existed=%s)",
            self.option_name,
            deleted,
            option=self.option_name,
        )
        return deleted
