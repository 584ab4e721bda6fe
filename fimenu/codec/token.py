"""
==============================================================================
URL Token Codec Module
==============================================================================

Turns any JSON value into a compact URL-safe token and back.

Token Layout:
------------
    value
      │  json.dumps (compact, UTF-8 kept, insertion order)
      ▼
    JSON with product keys shortened   {"i":"dent","p":630,...}
      │  UTF-8 bytes
      ▼
    base64, "+" → "-", "/" → "_", "=" stripped

Key Shortening:
--------------
Only object keys are rewritten, over the parsed value, never the text:

    id → i    icon → c    title → t    subtitle → s
    description → d    price → p    link → l

A key that already equals a short alias, or starts with "~", gets one "~"
prepended so the mapping stays reversible for arbitrary objects.

Legacy Tokens:
-------------
Earlier shared links carried base64 of ``encodeURIComponent(JSON)`` with the
long keys. When the decoded text is not JSON but is percent-encoded, it is
read as one of those tokens.

==============================================================================
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any, Dict, Optional, Tuple
from urllib.parse import unquote


# Module logger
logger = logging.getLogger(__name__)


KEY_ALIASES: Dict[str, str] = {
    "id": "i",
    "icon": "c",
    "title": "t",
    "subtitle": "s",
    "description": "d",
    "price": "p",
    "link": "l",
}

_KEY_NAMES: Dict[str, str] = {short: name for name, short in KEY_ALIASES.items()}

_ESCAPE = "~"


# =============================================================================
# KEY SHORTENING
# =============================================================================

def _shorten_key(key: str) -> str:
    if key in KEY_ALIASES:
        return KEY_ALIASES[key]
    if key in _KEY_NAMES or key.startswith(_ESCAPE):
        return _ESCAPE + key
    return key


def _expand_key(key: str) -> str:
    if key.startswith(_ESCAPE):
        return key[1:]
    return _KEY_NAMES.get(key, key)


def _rename_keys(value: Any, rename) -> Any:
    if isinstance(value, dict):
        return {rename(key): _rename_keys(item, rename) for key, item in value.items()}
    if isinstance(value, list):
        return [_rename_keys(item, rename) for item in value]
    return value


def shorten_keys(value: Any) -> Any:
    """Return a copy of ``value`` with known object keys replaced by aliases."""
    return _rename_keys(value, _shorten_key)


def expand_keys(value: Any) -> Any:
    """Inverse of :func:`shorten_keys`."""
    return _rename_keys(value, _expand_key)


# =============================================================================
# ENCODE / DECODE
# =============================================================================

def encode_token(value: Any) -> str:
    """
    Encode a JSON value as a URL-safe token.

    Args:
        value: Any JSON-serializable value (dicts must have string keys)

    Returns:
        Token made of ``[A-Za-z0-9_-]`` only

    Raises:
        TypeError: If ``value`` is not JSON-serializable
        ValueError: If ``value`` contains NaN or infinity

    Example:
        >>> encode_token(["dent", "xpel"])
        'WyJkZW50IiwieHBlbCJd'
    """
    text = json.dumps(
        shorten_keys(json.loads(json.dumps(value, allow_nan=False))),
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )
    raw = base64.urlsafe_b64encode(text.encode("utf-8"))
    return raw.decode("ascii").rstrip("=")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _parse_legacy(text: str) -> Any:
    if "%" not in text:
        raise ValueError("Not a percent-encoded token")
    return json.loads(unquote(text, errors="strict"), parse_constant=_reject_constant)


def parse_token(token: Any) -> Tuple[bool, Any]:
    """
    Decode a token produced by :func:`encode_token`, reporting success.

    Never raises. Unlike :func:`decode_token` this tells a well-formed
    token of JSON ``null`` apart from a malformed one.

    Args:
        token: Untrusted token, usually straight from a query parameter

    Returns:
        Tuple of (is_valid, value); value is None when not valid
    """
    if not isinstance(token, str) or not token:
        return False, None

    try:
        data = token.strip().encode("ascii")
        data += b"=" * (-len(data) % 4)
        raw = base64.b64decode(data, altchars=b"-_", validate=True)
        text = raw.decode("utf-8")

        try:
            value = json.loads(text, parse_constant=_reject_constant)
        except ValueError:
            return True, _parse_legacy(text)

        return True, expand_keys(value)

    except (binascii.Error, ValueError, RecursionError) as e:
        logger.debug(f"Rejected token ({len(token)} chars): {e}")
        return False, None


def decode_token(token: Any) -> Optional[Any]:
    """
    Decode a token, or return None.

    Anything that is not a well-formed token decodes to None and the caller
    falls back to its next state source. A token of JSON ``null`` also gives
    None, which callers treat the same way.
    """
    _, value = parse_token(token)
    return value
