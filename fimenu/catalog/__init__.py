"""
==============================================================================
Catalog Package - Product Management
==============================================================================

Products, packages and customer selections.

Classes:
--------
- Product: Pydantic model with per-field coercion
- Package: Discounted bundle of products
- ProductCatalog: Immutable catalog value with edit and pricing operations

==============================================================================
"""

from .models import Package, Product, new_package_id, new_product_id
from .catalog import ProductCatalog, normalize_packages, normalize_products
from .selection import (
    EMPTY_SELECTION,
    Selection,
    normalize_selection,
    selection_list,
    toggle,
    toggle_package,
)

__all__ = [
    "Package",
    "Product",
    "new_package_id",
    "new_product_id",
    "ProductCatalog",
    "normalize_packages",
    "normalize_products",
    "EMPTY_SELECTION",
    "Selection",
    "normalize_selection",
    "selection_list",
    "toggle",
    "toggle_package",
]
