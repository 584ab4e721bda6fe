"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes sitting between the API controllers and the catalog /
persistence layers.

Services:
---------
- MenuStateResolver: Resolves catalog and selection for a request
- AdminMenuService: Admin edits persisted in the key-value store

==============================================================================
"""

from .menu_service import AdminMenuService, MenuState, MenuStateResolver, StateSource

__all__ = [
    "AdminMenuService",
    "MenuState",
    "MenuStateResolver",
    "StateSource",
]
