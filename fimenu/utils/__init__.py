"""
==============================================================================
Utilities Package
==============================================================================

Modules:
--------
- validators: Link validation and price/text coercion
- links: Share links, email links and money formatting

==============================================================================
"""

from .validators import LinkValidator, coerce_price, coerce_text, safe_url

__all__ = [
    "LinkValidator",
    "coerce_price",
    "coerce_text",
    "safe_url",
]
