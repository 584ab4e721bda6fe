"""
==============================================================================
Database Connection Module
==============================================================================

Engine and sessions behind the key-value store.

This module implements:
- DatabaseManager: Process-wide owner of the engine and session factory
- get_db: FastAPI dependency yielding one session per request

SQLite:
-------
    sqlite:///./storage/db/fimenu.db   file next to the app (default)
    sqlite://                          in-memory, used by the tests

Sync endpoints run in FastAPI's thread pool, so SQLite connections are
opened with check_same_thread disabled.

==============================================================================
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from fimenu.config import get_settings


# Module logger
logger = logging.getLogger(__name__)

# Declarative base for StoredEntry
Base = declarative_base()


class DatabaseManager:
    """
    Owns the engine for the configured ``database_url``.

    The engine is built on first use, so importing the app never touches
    the database.

    Example:
        >>> manager = get_database_manager()
        >>> manager.create_tables()
        >>> session = manager.get_session()
    """

    _instance: Optional[DatabaseManager] = None

    def __new__(cls) -> DatabaseManager:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._engine = None
            cls._instance._session_factory = None
        return cls._instance

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = self._create_engine(get_settings().database_url)
        return self._engine

    @staticmethod
    def _create_engine(database_url: str) -> Engine:
        debug = get_settings().debug

        if database_url.startswith("sqlite"):
            engine = create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                echo=debug,
            )
        else:
            engine = create_engine(database_url, pool_pre_ping=True, echo=debug)

        logger.info(f"Created database engine: {database_url}")
        return engine

    def get_session(self) -> Session:
        """New session; the caller closes it."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.engine,
                autocommit=False,
                autoflush=False,
                expire_on_commit=False,
            )
        return self._session_factory()

    def create_tables(self) -> None:
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created/verified")

    def verify_connection(self) -> bool:
        """
        Run a trivial query.

        Returns:
            True if the database answered
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False

    def dispose(self) -> None:
        """Close pooled connections on shutdown."""
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Database connection pool disposed")


@lru_cache(maxsize=1)
def get_database_manager() -> DatabaseManager:
    return DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency yielding a request-scoped session.

    Usage:
        @router.get("/menu")
        def get_menu(db: Session = Depends(get_db)):
            ...
    """
    session = get_database_manager().get_session()
    try:
        yield session
    finally:
        session.close()
