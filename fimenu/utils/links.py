"""
==============================================================================
Share Link Utilities Module
==============================================================================

Builds the links a salesperson sends to a customer and the customer sends
back.

Link Formats:
------------
    customer menu   {base}/customer?products=<token>&selections=<token>
    admin share     same, with selections = token of []
    email           mailto:?subject=...&body=...<customer menu link>...

==============================================================================
"""

from __future__ import annotations

import math
from typing import AbstractSet, Any
from urllib.parse import quote, urlencode

from fimenu.catalog import ProductCatalog, selection_list
from fimenu.codec import encode_token


EMAIL_SUBJECT = "My F&I Product Selections"

EMAIL_BODY = (
    "Here are my selections:\n\n{url}\n\n"
    "Please review and contact me to finalize."
)


def products_token(catalog: ProductCatalog) -> str:
    return encode_token(catalog.product_records())


def selections_token(selection: AbstractSet[str]) -> str:
    return encode_token(selection_list(selection))


def build_menu_url(
    base_url: str,
    catalog: ProductCatalog,
    selection: AbstractSet[str] = frozenset()
) -> str:
    """
    Customer menu link carrying the catalog and selections.

    Args:
        base_url: Absolute URL of the customer page
        catalog: Catalog to embed
        selection: Selected product ids (empty for the admin share link)

    Returns:
        Absolute URL
    """
    query = urlencode({
        "products": products_token(catalog),
        "selections": selections_token(selection),
    })
    return f"{base_url}?{query}"


def build_email_link(menu_url: str) -> str:
    """``mailto:`` link with the menu URL in the body."""
    subject = quote(EMAIL_SUBJECT, safe="")
    body = quote(EMAIL_BODY.format(url=menu_url), safe="")
    return f"mailto:?subject={subject}&body={body}"


def format_money(amount: Any) -> str:
    """
    Format an amount for display.

    Example:
        >>> format_money(5344)
        '$5,344'
        >>> format_money(12.5)
        '$12.50'
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return "$0"
    if isinstance(amount, int):
        return f"${amount:,}"
    if not math.isfinite(amount):
        return "$0"
    if amount.is_integer():
        return f"${int(amount):,}"
    return f"${amount:,.2f}"
