"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

==============================================================================
"""

from .menu import (
    EncodeRequest,
    PackageCreate,
    PackagePatch,
    ProductCreate,
    ProductPatch,
    ToggleRequest,
)

__all__ = [
    "EncodeRequest",
    "PackageCreate",
    "PackagePatch",
    "ProductCreate",
    "ProductPatch",
    "ToggleRequest",
]
