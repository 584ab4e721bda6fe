"""
==============================================================================
Database Package
==============================================================================

SQLAlchemy infrastructure behind the persisted admin state.

Architecture:
------------
├── database.py   - DatabaseManager class, session factory
├── models.py     - StoredEntry ORM model
├── store.py      - KeyValueStore (get / set / delete)
└── init_db.py    - Table creation on startup

Usage:
------
    from fimenu.db import get_database_manager, KeyValueStore

    session = get_database_manager().get_session()
    try:
        saved = KeyValueStore(session).get("fi_products_v1")
    finally:
        session.close()

==============================================================================
"""

from .database import Base, DatabaseManager, get_database_manager, get_db
from .models import StoredEntry
from .store import KeyValueStore
from .init_db import init_db

__all__ = [
    "Base",
    "DatabaseManager",
    "get_database_manager",
    "get_db",
    "StoredEntry",
    "KeyValueStore",
    "init_db",
]
