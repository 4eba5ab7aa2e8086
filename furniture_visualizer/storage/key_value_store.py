"""
==============================================================================
Key-Value Slot Store
==============================================================================

Small persistent key/value store on top of the storage_slots table.

Every value is a JSON document kept under a fixed key. Each write or
delete is committed on its own, so a single slot is always updated
atomically; multi_remove deletes several slots in one transaction.

Database failures are rolled back and re-raised as StorageError so the
services can decide how each operation degrades.

==============================================================================
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from furniture_visualizer.core.exceptions import StorageError
from furniture_visualizer.db.models import StorageSlot


# Module logger
logger = logging.getLogger(__name__)


class StorageKeys:
    """Well-known slot keys."""

    PREFIX = "@furniture_visualizer"

    ADMIN_CREDENTIALS = f"{PREFIX}/admin_credentials"
    AUTH_SESSION = f"{PREFIX}/auth_session"
    FAILED_ATTEMPTS = f"{PREFIX}/failed_attempts"
    CUSTOM_BARCODES = f"{PREFIX}/custom_barcodes"
    USER_PREFERENCES = f"{PREFIX}/preferences"
    SCAN_HISTORY = f"{PREFIX}/scan_history"

    AUTH_KEYS = (ADMIN_CREDENTIALS, AUTH_SESSION, FAILED_ATTEMPTS)
    APP_DATA_KEYS = (CUSTOM_BARCODES, USER_PREFERENCES, SCAN_HISTORY)


class KeyValueStore:
    """
    Slot store bound to one SQLAlchemy session.

    Example:
        >>> store = KeyValueStore(db)
        >>> store.set_json(StorageKeys.USER_PREFERENCES, {"dark_mode": True})
        >>> store.get_json(StorageKeys.USER_PREFERENCES)
        {'dark_mode': True}
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    # =========================================================================
    # RAW STRING ACCESS
    # =========================================================================

    def get_item(self, key: str) -> Optional[str]:
        """
        Read the raw value of a slot.

        Returns:
            Stored string, or None if the slot is empty

        Raises:
            StorageError: If the read fails
        """
        try:
            slot = self._db.get(StorageSlot, key)
            return slot.value if slot is not None else None
        except SQLAlchemyError as e:
            self._rollback()
            logger.error(f"Failed to read slot {key}: {e}")
            raise StorageError("Failed to read stored data", key) from e

    def set_item(self, key: str, value: str) -> None:
        """
        Write the raw value of a slot, replacing any previous value.

        Raises:
            StorageError: If the write fails
        """
        try:
            slot = self._db.get(StorageSlot, key)
            if slot is None:
                self._db.add(StorageSlot(key=key, value=value))
            else:
                slot.value = value
            self._db.commit()
        except SQLAlchemyError as e:
            self._rollback()
            logger.error(f"Failed to write slot {key}: {e}")
            raise StorageError("Failed to write stored data", key) from e

    def remove_item(self, key: str) -> None:
        """
        Delete a slot. Deleting an empty slot is a no-op.

        Raises:
            StorageError: If the delete fails
        """
        self.multi_remove([key])

    def multi_remove(self, keys: Iterable[str]) -> None:
        """
        Delete several slots in one transaction.

        Raises:
            StorageError: If the delete fails (nothing is removed)
        """
        keys = list(keys)
        try:
            for key in keys:
                slot = self._db.get(StorageSlot, key)
                if slot is not None:
                    self._db.delete(slot)
            self._db.commit()
        except SQLAlchemyError as e:
            self._rollback()
            logger.error(f"Failed to remove slots {keys}: {e}")
            raise StorageError("Failed to remove stored data") from e

    # =========================================================================
    # JSON ACCESS
    # =========================================================================

    def get_json(self, key: str) -> Optional[Any]:
        """
        Read and decode a JSON slot.

        Raises:
            StorageError: If the read fails or the value is not valid JSON
        """
        raw = self.get_item(key)
        if raw is None:
            return None

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupt JSON in slot {key}: {e}")
            raise StorageError("Stored data is corrupt", key) from e

    def set_json(self, key: str, data: Any) -> None:
        """Encode and write a JSON slot."""
        self.set_item(key, json.dumps(data))

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _rollback(self) -> None:
        try:
            self._db.rollback()
        except SQLAlchemyError as e:
            logger.warning(f"Rollback failed: {e}")
