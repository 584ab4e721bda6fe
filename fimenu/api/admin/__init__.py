"""
==============================================================================
Admin API Endpoints
==============================================================================

Routers mounted under the admin prefix and guarded by AdminAccessGate.

Routers:
--------
- products: Catalog editing, import/export, share link
- packages: Package editing

==============================================================================
"""

from . import products, packages

__all__ = ["products", "packages"]
