"""
Save-time normalization of submitted contact data.

Invalid input never raises: values are corrected or rolled back and the
submitter is told through warnings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.utils.html import format_html
from django.utils.translation import gettext as _

_SPACE_RUN = re.compile(r" +")
_NOT_TEL_CHAR = re.compile(r"[^0-9+\-]")

LEVEL_ERROR = "error"
LEVEL_INFO = "info"


@dataclass(frozen=True)
class SettingsWarning:
    field: str
    message: str
    level: str = LEVEL_INFO


@dataclass
class NormalizationResult:
    record: Dict[str, str]
    warnings: List[SettingsWarning] = field(default_factory=list)


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value)
    except ValidationError:
        return False
    return True


def normalize_phone(value: str) -> str:
    """Spaces become hyphens; anything unfit for a ``tel:`` link is dropped."""
    return _NOT_TEL_CHAR.sub("", _SPACE_RUN.sub("-", value))


def _normalize_email(
    record: Dict[str, str], previous: Mapping[str, Any], warnings: List[SettingsWarning]
) -> None:
    submitted = record["email"]
    if submitted == "" or is_valid_email(submitted):
        return

    fallback = _clean(previous.get("email"))
    if fallback:
        msg = format_html(
            _("{} is not a valid email address.<br />The previous address {} will be kept."),
            format_html("<code>{}</code>", submitted),
            format_html("<code>{}</code>", fallback),
        )
    else:
        msg = format_html(
            _("{} is not a valid email address.<br />The field has been left empty; {} will be shown instead."),
            format_html("<code>{}</code>", submitted),
            _("the administrator address"),
        )
    warnings.append(SettingsWarning("email", msg, LEVEL_ERROR))
    record["email"] = fallback


def _normalize_phone(record: Dict[str, str], warnings: List[SettingsWarning]) -> None:
    submitted = record["phone"]
    if submitted == "":
        return

    new_phone = normalize_phone(submitted)
    if new_phone == submitted:
        return

    msg = format_html(
        _(
            "The phone number {} has been changed to {}. "
            "Please check if it is still okay. "
            "Replace spaces with {} if you need separators."
        ),
        format_html("<code>{}</code>", submitted),
        format_html("<code>{}</code>", new_phone),
        format_html("<code>{}</code>", "-"),
    )
    warnings.append(SettingsWarning("phone", msg, LEVEL_INFO))
    record["phone"] = new_phone


def normalize_settings(
    submitted: Mapping[str, Any], previous: Optional[Mapping[str, Any]] = None
) -> NormalizationResult:
    """
    Trim every submitted value, validate ``email`` and canonicalize ``phone``.

    Keys missing from ``submitted`` keep their value from ``previous``.
    """
    previous = previous if isinstance(previous, Mapping) else {}
    cleaned = {str(key): _clean(value) for key, value in submitted.items()}
    warnings: List[SettingsWarning] = []

    if "email" in cleaned:
        _normalize_email(cleaned, previous, warnings)
    if "phone" in cleaned:
        _normalize_phone(cleaned, warnings)

    record = {str(k): _clean(v) for k, v in previous.items()}
    record.update(cleaned)
    return NormalizationResult(record=record, warnings=warnings)
