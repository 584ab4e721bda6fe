"""
==============================================================================
Database Initialization Module
==============================================================================

Creates the key-value table on startup.

Usage:
------
    from fimenu.db import init_db
    init_db()

==============================================================================
"""

from __future__ import annotations

import logging

from fimenu.db.database import get_database_manager
# Register ORM models on Base.metadata before create_all
from fimenu.db import models  # noqa: F401


# Module logger
logger = logging.getLogger(__name__)


def init_db() -> bool:
    """
    Create missing tables and verify the connection.

    Returns:
        True if the database is reachable
    """
    db_manager = get_database_manager()
    db_manager.create_tables()

    if not db_manager.verify_connection():
        logger.error("❌ Database not reachable")
        return False

    logger.info("✅ Database ready")
    return True
