"""
==============================================================================
API v1 Endpoints
==============================================================================

Version 1 of the public REST API.

Routers:
--------
- health: Health check endpoints
- codec: Token encode/decode
- menu: Customer menu and selection toggles

==============================================================================
"""

from . import health, codec, menu

__all__ = ["health", "codec", "menu"]
