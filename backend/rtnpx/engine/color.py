"""Raw color token validation.

Accepted forms: ``#rgb`` / ``#rgba`` / ``#rrggbb`` / ``#rrggbbaa`` (leading
``#`` optional), ``0xRRGGBB[AA]``, bare alphabetic names, ``rgb(r,g,b)`` and
``rgba(r,g,b,a)``. Validation is syntactic only.
"""

from __future__ import annotations

import logging
import re

from rtnpx.config import settings
from rtnpx.engine.errors import InvalidColorToken

logger = logging.getLogger(__name__)

_HEX_0X_RE = re.compile(r"^0x([0-9a-fA-F]{6,8})$")
_BARE_HEX_RE = re.compile(r"^(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_COLOR_RE = re.compile(
    r"^#[0-9a-fA-F]{3,8}$"
    r"|^[a-zA-Z]+$"
    r"|^rgb\(\s*\d+\s*,\s*\d+\s*,\s*\d+\s*\)$"
    r"|^rgba\(\s*\d+\s*,\s*\d+\s*,\s*\d+\s*,\s*(?:0|1|0?\.\d+)\s*\)$"
)


def normalize_color(token: str | None) -> str | None:
    """Return the canonical form of ``token``, or None if it is not a color."""
    if not token:
        return None
    s = str(token).strip()
    m = _HEX_0X_RE.match(s)
    if m:
        s = "#" + m.group(1)
    elif _BARE_HEX_RE.match(s):
        s = "#" + s
    return s if _COLOR_RE.match(s) else None


def sanitize_color(token: str | None, fallback: str | None = None) -> str:
    """Like normalize_color, but never fails: invalid tokens become ``fallback``."""
    fallback = fallback or settings.default_color
    color = normalize_color(token)
    if color is None:
        if token:
            logger.debug("Ignoring invalid color token %r", token)
        return fallback
    return color


def require_color(token: str | None) -> str:
    color = normalize_color(token)
    if color is None:
        raise InvalidColorToken(str(token))
    return color


def is_sentinel(token: str | None, sentinel: str | None = None) -> bool:
    """True if ``token`` is the reserved default color (case-insensitive, '#' optional)."""
    if token is None:
        return False
    sentinel = (sentinel or settings.default_color).lstrip("#").lower()
    return str(token).strip().lstrip("#").lower() == sentinel
