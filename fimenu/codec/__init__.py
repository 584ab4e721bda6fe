"""
==============================================================================
Codec Package - URL State Tokens
==============================================================================

Stateless encode/decode pair used to carry the product catalog and the
customer's selections inside a shared link.

Functions:
----------
- encode_token: JSON value -> URL-safe token
- decode_token: token -> JSON value, or None when malformed
- parse_token: token -> (is_valid, value)

==============================================================================
"""

from .token import (
    KEY_ALIASES,
    decode_token,
    encode_token,
    expand_keys,
    parse_token,
    shorten_keys,
)

__all__ = [
    "KEY_ALIASES",
    "decode_token",
    "encode_token",
    "expand_keys",
    "parse_token",
    "shorten_keys",
]
