"""
Selection set helpers.

A selection is a frozenset of product ids. Ids that are not in the current
catalog are kept but ignored wherever totals are computed.
"""

import json
from typing import AbstractSet, Any, FrozenSet, Optional

from .models import Package
from fimenu.utils.validators import coerce_text


Selection = FrozenSet[str]

EMPTY_SELECTION: Selection = frozenset()


def _as_id(item: Any) -> str:
    if item is None:
        return "null"
    if isinstance(item, (list, dict)):
        return json.dumps(item, ensure_ascii=False, separators=(",", ":"))
    return coerce_text(item, "")


def normalize_selection(raw: Any) -> Optional[Selection]:
    """
    Coerce a decoded selection list to a set of id strings.

    Every element becomes text: scalars as in ``coerce_text``, null as
    ``"null"`` and nested arrays or objects as compact JSON. Empty ids are
    dropped.

    Args:
        raw: Value decoded from a ``selections`` token

    Returns:
        frozenset of ids, or None when ``raw`` is not a list
    """
    if not isinstance(raw, list):
        return None
    return frozenset(_as_id(item) for item in raw) - {""}


def toggle(selection: AbstractSet[str], product_id: str) -> Selection:
    """Add ``product_id`` if absent, remove it if present."""
    if product_id in selection:
        return frozenset(selection) - {product_id}
    return frozenset(selection) | {product_id}


def toggle_package(selection: AbstractSet[str], package: Package) -> Selection:
    """
    Select every product of ``package``, or clear them all when every one is
    already selected.
    """
    members = frozenset(package.product_ids)
    if members and members <= selection:
        return frozenset(selection) - members
    return frozenset(selection) | members


def selection_list(selection: AbstractSet[str]) -> list:
    """Stable ordering used when a selection is encoded."""
    return sorted(selection)
