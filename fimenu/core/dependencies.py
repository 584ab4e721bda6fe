"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for the persistence and service layers.

Dependency Hierarchy:
--------------------
                    ┌─────────────────┐
                    │    get_db()     │
                    └────────┬────────┘
                             │
                    ┌────────▼────────┐
                    │   get_store()   │
                    └────────┬────────┘
                             │
             ┌───────────────┴───────────────┐
             │                               │
    ┌────────▼────────┐             ┌────────▼────────┐
    │ get_resolver()  │             │ get_admin_svc() │
    └─────────────────┘             └─────────────────┘

Admin authentication is not a dependency: AdminAccessGate rejects
unauthenticated admin requests before routing.

==============================================================================
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from fimenu.config import Settings, get_settings
from fimenu.db.database import get_db
from fimenu.db.store import KeyValueStore
from fimenu.services.menu_service import AdminMenuService, MenuStateResolver


def get_store(db: Session = Depends(get_db)) -> KeyValueStore:
    """Key-value store bound to the request's session."""
    return KeyValueStore(db)


def get_resolver(
    store: KeyValueStore = Depends(get_store),
    settings: Settings = Depends(get_settings)
) -> MenuStateResolver:
    return MenuStateResolver(store, settings)


def get_admin_service(
    store: KeyValueStore = Depends(get_store),
    settings: Settings = Depends(get_settings)
) -> AdminMenuService:
    return AdminMenuService(store, settings)
