"""
apps.contact_data.shortcodes
============================

Inline placeholders for authored content.

Syntax::

    [public_email]
    [public_phone link="false" before="Tel: "]
    [public_twitter pattern='<a href="%value%">Follow us</a>' /]
    [[public_email]]          -> literal "[public_email]"

Only registered tags are expanded; anything else is left untouched.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Mapping

logger = logging.getLogger(__name__)

ShortcodeHandler = Callable[[Mapping[str, str]], str]

_TAG_NAME = r"[A-Za-z0-9_\-]+"

# [[tag ...]] escapes, [tag ...] or [tag ... /] expands.
_SHORTCODE_RE = re.compile(
    r"(?P<open>\[?)\[(?P<tag>" + _TAG_NAME + r")(?P<attrs>(?:[^\[\]\"']|\"[^\"]*\"|'[^']*')*?)(?P<slash>/?)\](?P<close>\]?)"
)

_ATTR_RE = re.compile(
    r"""(?P<name>[\w\-]+)\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[^\s"']+))"""
)


def parse_attributes(text: str) -> Dict[str, str]:
    """
    ``name="v" name='v' name=v`` pairs; names are lower-cased and
    positional values are ignored.
    """
    attrs: Dict[str, str] = {}
    for match in _ATTR_RE.finditer(text or ""):
        value = match.group("dq")
        if value is None:
            value = match.group("sq")
        if value is None:
            value = match.group("bare")
        attrs[match.group("name").lower()] = value
    return attrs


class ShortcodeRegistry:
    def __init__(self):
        self._handlers: Dict[str, ShortcodeHandler] = {}

    def add(self, tag: str, handler: ShortcodeHandler) -> None:
        if not re.fullmatch(_TAG_NAME, tag or ""):
            raise ValueError(f"Invalid shortcode tag: {tag!r}")
        if tag in self._handlers:
            logger.debug("Replacing shortcode handler for [%s]", tag)
        self._handlers[tag] = handler

    def remove(self, tag: str) -> None:
        self._handlers.pop(tag, None)

    def has(self, tag: str) -> bool:
        return tag in self._handlers

    def tags(self) -> List[str]:
        return list(self._handlers)

    def expand(self, content: str) -> str:
        if not content or "[" not in content or not self._handlers:
            return content

        def _replace(match: "re.Match[str]") -> str:
            tag = match.group("tag")
            if tag not in self._handlers:
                return match.group(0)
            if match.group("open") and match.group("close"):
                return match.group(0)[1:-1]
            attrs = parse_attributes(match.group("attrs"))
            output = self._handlers[tag](attrs)
            return match.group("open") + str(output) + match.group("close")

        return _SHORTCODE_RE.sub(_replace, content)
