"""
==============================================================================
Key-Value Store Module
==============================================================================

Server-side stand-in for the admin's browser local storage.

Values are opaque text (the service stores plain JSON). A write overwrites
whatever was there; there is a single writer, so no locking is done.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fimenu.core import exceptions
from fimenu.db.models import StoredEntry


# Module logger
logger = logging.getLogger(__name__)


class KeyValueStore:
    """
    String key → string value store on top of a SQLAlchemy session.

    Every write commits immediately; a failed commit is rolled back and
    raised as INTERNAL_ERROR.

    Example:
        >>> store = KeyValueStore(session)
        >>> store.set("fi_products_v1", "[]")
        >>> store.get("fi_products_v1")
        '[]'
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def _commit(self, message: str) -> None:
        try:
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error(f"❌ {message}: {e}")
            raise exceptions.internal_error(message)

    def get(self, key: str) -> Optional[str]:
        """Return the stored text, or None if the key was never written."""
        entry = self._db.get(StoredEntry, key)
        return entry.value if entry is not None else None

    def set(self, key: str, value: str) -> None:
        """Create or overwrite ``key``."""
        self.set_many({key: value})

    def set_many(self, entries: Mapping[str, str]) -> None:
        """Create or overwrite several keys in one commit; all or none are saved."""
        for key, value in entries.items():
            entry = self._db.get(StoredEntry, key)
            if entry is None:
                self._db.add(StoredEntry(key=key, value=value))
            else:
                entry.value = value

        keys = ", ".join(f"'{key}'" for key in entries)
        self._commit(f"Could not save {keys}")
        logger.debug(f"Stored {keys}")

    def delete(self, key: str) -> bool:
        """
        Remove ``key``.

        Returns:
            True if an entry was removed
        """
        entry = self._db.get(StoredEntry, key)
        if entry is None:
            return False

        self._db.delete(entry)
        self._commit(f"Could not remove '{key}'")
        logger.debug(f"Removed '{key}'")
        return True
