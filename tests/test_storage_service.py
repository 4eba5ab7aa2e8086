"""
==============================================================================
Storage Service Tests
==============================================================================

Tests for custom catalog entries, preferences and scan history.

==============================================================================
"""

from furniture_visualizer.catalog import BarcodeCatalog
from furniture_visualizer.schemas.preferences import UserPreferences
from furniture_visualizer.services import StorageService
from furniture_visualizer.storage import KeyValueStore, StorageKeys


class TestCustomBarcodes:
    """Tests for persisted custom catalog records."""

    def test_nothing_stored(self, storage_service: StorageService):
        """Test loading before any save gives None."""
        assert storage_service.load_custom_barcodes() is None

    def test_save_and_restore(self, storage_service: StorageService, catalog: BarcodeCatalog):
        """Test saved custom records can be re-applied to a fresh catalog."""
        catalog.insert("STYLE-321", {"type": "style", "name": "Ottoman", "image_url": "o.jpg"})
        assert storage_service.save_custom_barcodes(catalog.custom_records()) is True

        stored = storage_service.load_custom_barcodes()
        assert stored["STYLE-321"]["name"] == "Ottoman"

        restored = BarcodeCatalog()
        assert restored.load_custom(stored) == 1
        assert restored.lookup("STYLE-321") == catalog.lookup("STYLE-321")

    def test_unusable_payload(self, storage_service: StorageService, store: KeyValueStore):
        """Test a non-mapping payload is ignored."""
        store.set_json(StorageKeys.CUSTOM_BARCODES, ["STYLE-001"])
        assert storage_service.load_custom_barcodes() is None

    def test_storage_failure(self, broken_store: KeyValueStore, catalog: BarcodeCatalog):
        """Test storage errors are reported, not raised."""
        service = StorageService(broken_store)
        assert service.save_custom_barcodes(catalog.custom_records()) is False
        assert service.load_custom_barcodes() is None


class TestPreferences:
    """Tests for user preferences."""

    def test_defaults(self, storage_service: StorageService):
        """Test defaults are returned when nothing is stored."""
        preferences = storage_service.load_user_preferences()
        assert preferences == UserPreferences(dark_mode=False, auto_scan=True, save_history=True)

    def test_save_and_load(self, storage_service: StorageService):
        """Test saved preferences are returned."""
        storage_service.save_user_preferences(UserPreferences(dark_mode=True, save_history=False))

        preferences = storage_service.load_user_preferences()
        assert preferences.dark_mode is True
        assert preferences.save_history is False
        assert preferences.auto_scan is True

    def test_invalid_stored_preferences(self, storage_service: StorageService, store: KeyValueStore):
        """Test unreadable preferences fall back to defaults."""
        store.set_json(StorageKeys.USER_PREFERENCES, {"dark_mode": "sometimes"})
        assert storage_service.load_user_preferences() == UserPreferences()

    def test_storage_failure(self, broken_store: KeyValueStore):
        """Test storage errors give the defaults."""
        service = StorageService(broken_store)
        assert service.load_user_preferences() == UserPreferences()
        assert service.save_user_preferences(UserPreferences()) is False


class TestScanHistory:
    """Tests for scan history."""

    def test_newest_first(self, storage_service: StorageService, clock):
        """Test scans are prepended with a timestamp and id."""
        storage_service.add_to_scan_history({"barcode": "STYLE-001"})
        clock.advance(seconds=5)
        storage_service.add_to_scan_history({"barcode": "MAT-001"})

        history = storage_service.get_scan_history()
        assert [scan["barcode"] for scan in history] == ["MAT-001", "STYLE-001"]

        newest = history[0]
        assert newest["timestamp"] == int(clock.now.timestamp() * 1000)
        assert newest["id"].startswith(f"scan_{newest['timestamp']}_")
        assert len(newest["id"].rsplit("_", 1)[1]) == 9

    def test_history_capped(self, storage_service: StorageService):
        """Test only the newest fifty scans are kept."""
        for i in range(55):
            storage_service.add_to_scan_history({"barcode": f"STYLE-{i:03d}"})

        history = storage_service.get_scan_history()
        assert len(history) == 50
        assert history[0]["barcode"] == "STYLE-054"
        assert history[-1]["barcode"] == "STYLE-005"

    def test_clear_history(self, storage_service: StorageService):
        """Test clearing removes every scan."""
        storage_service.add_to_scan_history({"barcode": "STYLE-001"})
        assert storage_service.clear_scan_history() is True
        assert storage_service.get_scan_history() == []

    def test_storage_failure(self, broken_store: KeyValueStore):
        """Test storage errors are reported, not raised."""
        service = StorageService(broken_store)
        assert service.add_to_scan_history({"barcode": "STYLE-001"}) is False
        assert service.get_scan_history() == []
        assert service.clear_scan_history() is False


class TestClearAllData:
    """Tests for wiping application data."""

    def test_clear_all_data(self, storage_service: StorageService, store: KeyValueStore):
        """Test app data slots are removed while auth slots survive."""
        storage_service.save_user_preferences(UserPreferences(dark_mode=True))
        storage_service.add_to_scan_history({"barcode": "STYLE-001"})
        store.set_json(StorageKeys.CUSTOM_BARCODES, {})
        store.set_json(StorageKeys.AUTH_SESSION, {"token": "kept"})

        assert storage_service.clear_all_data() is True

        assert all(store.get_item(key) is None for key in StorageKeys.APP_DATA_KEYS)
        assert store.get_json(StorageKeys.AUTH_SESSION) == {"token": "kept"}

    def test_storage_failure(self, broken_store: KeyValueStore):
        """Test a failed wipe reports False."""
        assert StorageService(broken_store).clear_all_data() is False
