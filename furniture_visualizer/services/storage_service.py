"""
==============================================================================
Storage Service Module
==============================================================================

Persistence for the non-auth application data:

- custom catalog entries (records added through the admin screen)
- user preferences
- scan history (newest first, capped)

Every operation degrades instead of raising: writes report False and
reads fall back to empty values or defaults when storage fails.

==============================================================================
"""

from __future__ import annotations

import logging
import secrets
import string
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import ValidationError

from furniture_visualizer.catalog import CatalogRecord
from furniture_visualizer.config import Settings, get_settings
from furniture_visualizer.core.exceptions import StorageError
from furniture_visualizer.schemas.preferences import UserPreferences
from furniture_visualizer.storage import KeyValueStore, StorageKeys


# Module logger
logger = logging.getLogger(__name__)


class StorageService:
    """
    Application data persistence on top of the slot store.

    Example:
        >>> service = StorageService(KeyValueStore(db))
        >>> service.add_to_scan_history({"barcode": "STYLE-001", "name": "Sofa"})
        True
        >>> service.get_scan_history()[0]["barcode"]
        'STYLE-001'
    """

    SCAN_ID_ALPHABET = string.ascii_lowercase + string.digits

    def __init__(
        self,
        store: KeyValueStore,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None
    ) -> None:
        self._store = store
        self._settings = settings or get_settings()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    # =========================================================================
    # CUSTOM CATALOG ENTRIES
    # =========================================================================

    def save_custom_barcodes(self, records: Mapping[str, CatalogRecord]) -> bool:
        """Persist the custom catalog records, replacing the stored set."""
        payload = {barcode: record.to_dict() for barcode, record in records.items()}
        try:
            self._store.set_json(StorageKeys.CUSTOM_BARCODES, payload)
            return True
        except StorageError as e:
            logger.error(f"Error saving custom barcodes: {e}")
            return False

    def load_custom_barcodes(self) -> Optional[Dict[str, Dict[str, Any]]]:
        """
        Load persisted custom catalog records.

        Returns:
            Mapping of barcode -> fields, or None if nothing usable is stored
        """
        try:
            data = self._store.get_json(StorageKeys.CUSTOM_BARCODES)
        except StorageError as e:
            logger.error(f"Error loading custom barcodes: {e}")
            return None

        if not isinstance(data, dict):
            return None
        return data

    # =========================================================================
    # USER PREFERENCES
    # =========================================================================

    def save_user_preferences(self, preferences: UserPreferences) -> bool:
        """Persist user preferences."""
        try:
            self._store.set_json(StorageKeys.USER_PREFERENCES, preferences.model_dump())
            return True
        except StorageError as e:
            logger.error(f"Error saving preferences: {e}")
            return False

    def load_user_preferences(self) -> UserPreferences:
        """Load user preferences, or the defaults if none are stored."""
        try:
            data = self._store.get_json(StorageKeys.USER_PREFERENCES)
        except StorageError as e:
            logger.error(f"Error loading preferences: {e}")
            return UserPreferences()

        if not isinstance(data, dict):
            return UserPreferences()

        try:
            return UserPreferences.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid stored preferences: {e}")
            return UserPreferences()

    # =========================================================================
    # SCAN HISTORY
    # =========================================================================

    def add_to_scan_history(self, scan: Mapping[str, Any]) -> bool:
        """
        Prepend a scan to the history, keeping only the newest entries.

        Each entry gets a timestamp (epoch milliseconds) and an id of the
        form scan_<timestamp>_<random>.
        """
        try:
            history = self._read_history()
            timestamp = int(self._clock().timestamp() * 1000)
            entry = {
                **scan,
                "timestamp": timestamp,
                "id": f"scan_{timestamp}_{self._random_suffix()}",
            }
            history.insert(0, entry)
            self._store.set_json(
                StorageKeys.SCAN_HISTORY,
                history[: self._settings.scan_history_limit]
            )
            return True
        except StorageError as e:
            logger.error(f"Error adding to scan history: {e}")
            return False

    def get_scan_history(self) -> List[Dict[str, Any]]:
        """Past scans, newest first; empty on storage errors."""
        try:
            return self._read_history()
        except StorageError as e:
            logger.error(f"Error getting scan history: {e}")
            return []

    def clear_scan_history(self) -> bool:
        """Delete the scan history."""
        try:
            self._store.remove_item(StorageKeys.SCAN_HISTORY)
            return True
        except StorageError as e:
            logger.error(f"Error clearing scan history: {e}")
            return False

    def clear_all_data(self) -> bool:
        """Delete custom entries, preferences and history together."""
        try:
            self._store.multi_remove(StorageKeys.APP_DATA_KEYS)
            return True
        except StorageError as e:
            logger.error(f"Error clearing all data: {e}")
            return False

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _read_history(self) -> List[Dict[str, Any]]:
        data = self._store.get_json(StorageKeys.SCAN_HISTORY)
        return data if isinstance(data, list) else []

    def _random_suffix(self, length: int = 9) -> str:
        return "".join(secrets.choice(self.SCAN_ID_ALPHABET) for _ in range(length))
