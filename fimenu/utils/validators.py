"""
==============================================================================
Validation Utilities Module
==============================================================================

Coercion helpers applied to untrusted catalog data (URL tokens, imports,
persisted state).

This module implements:
- LinkValidator: Accepts absolute http/https URLs only
- coerce_price: Anything → finite non-negative int or float
- coerce_text: Scalars → str, everything else → fallback

Coercion Rules:
--------------
    price     "1,850" → 0     "1850" → 1850    -5 → 0    True → 0
              NaN → 0         12.5 → 12.5      12.0 → 12
              10**400 → 0
    text      None → fallback  42 → "42"       [..] → fallback
    link      "javascript:..." → None          " https://x.com " → "https://x.com/"

==============================================================================
"""

from __future__ import annotations

import math
from typing import Any, Optional, Tuple, Union

from pydantic import HttpUrl, TypeAdapter, ValidationError


Number = Union[int, float]

_http_url = TypeAdapter(HttpUrl)


class LinkValidator:
    """
    Validator for product "learn more" links.

    Only absolute ``http``/``https`` URLs are accepted; everything else is
    treated as if no link was set.

    Example:
        >>> validator = LinkValidator()
        >>> validator.is_valid("javascript:alert(1)")
        False
        >>> validator.validate("https://www.xpel.com")
        (True, 'https://www.xpel.com/', None)
    """

    def validate(self, url: Any) -> Tuple[bool, Optional[str], Optional[str]]:
        """
        Validate and normalize a link.

        Args:
            url: Raw link value

        Returns:
            Tuple of (is_valid, normalized_url, error_message)
        """
        if not isinstance(url, str):
            return False, None, "Link must be a string"

        trimmed = url.strip()
        if not trimmed:
            return False, None, "Link is empty"

        try:
            normalized = _http_url.validate_python(trimmed)
        except ValidationError as e:
            return False, None, e.errors()[0]["msg"]

        return True, str(normalized), None

    def is_valid(self, url: Any) -> bool:
        """Quick validation check."""
        is_valid, _, _ = self.validate(url)
        return is_valid


def safe_url(url: Any) -> Optional[str]:
    """Return the normalized http(s) URL, or None."""
    _, normalized, _ = LinkValidator().validate(url)
    return normalized


def coerce_price(value: Any) -> Number:
    """Coerce any value to a finite non-negative amount."""
    if isinstance(value, bool) or value is None:
        return 0

    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0

    if not isinstance(value, (int, float)):
        return 0

    # Amounts must be representable as a finite float
    try:
        as_float = float(value)
    except OverflowError:
        return 0
    if not math.isfinite(as_float):
        return 0

    if isinstance(value, float) and value.is_integer():
        value = int(value)

    return value if value > 0 else 0


def coerce_text(value: Any, fallback: str) -> str:
    """Render scalar values as text; missing or structured values use the fallback."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return fallback
