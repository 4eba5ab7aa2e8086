"""
==============================================================================
Barcode Catalog Module
==============================================================================

In-memory catalog of furniture styles and materials keyed by barcode.

Features:
---------
- Barcode format gate (STYLE-### / MAT-###) on every read and write
- Whole-record overwrite on insert (no field merge)
- Type-filtered listing in insertion order
- Tracking of records inserted after seeding, for persistence
- Single-writer lock around mutations

Seed File Structure (optional, replaces the built-in seed):
----------------------------------------------------------
[
  {"id": "STYLE-001", "type": "style", "name": "...", "image_url": "..."},
  ...
]

==============================================================================
"""

from __future__ import annotations

import json
import logging
import random
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

from pydantic import ValidationError

from furniture_visualizer.core import exceptions
from furniture_visualizer.utils.validators import BarcodeValidator

from .models import CatalogRecord
from .seed import SEED_RECORDS


# Module logger
logger = logging.getLogger(__name__)


class BarcodeCatalog:
    """
    Barcode-keyed catalog of style and material records.

    The catalog is owned by whoever creates it (the application keeps
    one on app.state); nothing here is module-global.

    Example:
        >>> catalog = BarcodeCatalog()
        >>> catalog.lookup("STYLE-001").name
        'Modern Sectional Sofa'
        >>> catalog.insert("MAT-100", {"type": "material", "name": "Rust Corduroy"})
        True
        >>> [r.id for r in catalog.list_by_type("material")][-1]
        'MAT-100'
    """

    # Suggested ids are drawn from this range
    GENERATED_MIN = 100
    GENERATED_MAX = 999

    _validator = BarcodeValidator()

    def __init__(self, seed: Optional[Iterable[Mapping[str, Any]]] = None) -> None:
        """
        Initialize the catalog with seed records.

        Args:
            seed: Records to start with (defaults to the built-in set)
        """
        self._records: Dict[str, CatalogRecord] = {}
        self._custom_ids: Set[str] = set()
        self._lock = threading.RLock()

        self._load_seed(SEED_RECORDS if seed is None else seed)

    @classmethod
    def from_file(cls, seed_file: Path) -> BarcodeCatalog:
        """
        Build a catalog from a JSON seed file.

        Raises:
            FileNotFoundError: If the file is missing
            json.JSONDecodeError: If the file is not valid JSON
        """
        try:
            with seed_file.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.error(f"Catalog seed file not found: {seed_file}")
            raise
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in catalog seed file: {e}")
            raise

        if isinstance(data, dict):
            data = [{"id": key, **value} for key, value in data.items()]

        return cls(seed=data)

    # =========================================================================
    # LOADING
    # =========================================================================

    def _load_seed(self, seed: Iterable[Mapping[str, Any]]) -> None:
        """Load trusted seed records, skipping malformed entries."""
        for item in seed:
            barcode = item.get("id")
            if not self.is_valid_id(barcode):
                logger.warning(f"Skipping seed record with invalid id: {barcode!r}")
                continue
            try:
                self._records[barcode] = self._build_record(barcode, item)
            except ValidationError as e:
                logger.warning(f"Skipping malformed seed record {barcode}: {e}")

        logger.info(f"✅ Catalog seeded with {len(self._records)} records")

    def load_custom(self, records: Mapping[str, Mapping[str, Any]]) -> int:
        """
        Re-apply previously persisted custom records.

        Args:
            records: Mapping of barcode -> record fields

        Returns:
            Number of records applied
        """
        applied = 0
        for barcode, fields in records.items():
            try:
                self.insert(barcode, fields)
                applied += 1
            except (exceptions.AppException, TypeError, ValueError) as e:
                logger.warning(f"Skipping stored custom record {barcode!r}: {e}")

        if applied:
            logger.info(f"Restored {applied} custom catalog record(s)")
        return applied

    @staticmethod
    def _build_record(barcode: str, fields: Mapping[str, Any]) -> CatalogRecord:
        # Fields are stored verbatim; only the id is forced to the barcode
        data = dict(fields)
        data["id"] = barcode
        return CatalogRecord.model_validate(data)

    # =========================================================================
    # CORE OPERATIONS
    # =========================================================================

    @classmethod
    def is_valid_id(cls, barcode: Any) -> bool:
        """
        Check the barcode format.

        Returns:
            True iff barcode is a string matching ^(STYLE|MAT)-\\d{3,}$
        """
        return cls._validator.is_valid(barcode)

    def lookup(self, barcode: Any) -> Optional[CatalogRecord]:
        """
        Find the record stored under a barcode.

        Never raises: invalid and unknown barcodes both yield None.
        """
        if not self.is_valid_id(barcode):
            return None

        with self._lock:
            record = self._records.get(barcode)
            return record.model_copy() if record is not None else None

    def insert(self, barcode: Any, fields: Mapping[str, Any]) -> bool:
        """
        Store a record under a barcode, replacing any previous record.

        The stored record is exactly {id: barcode, **fields}; nothing from
        the previous record survives. The prefix/type pairing is not
        checked here, and no field is validated or defaulted.

        Args:
            barcode: Barcode identifier
            fields: Record fields (type, name, image_url, description, ...)

        Returns:
            True on success

        Raises:
            AppException: INVALID_FORMAT if the barcode fails the format gate
        """
        if not self.is_valid_id(barcode):
            raise exceptions.invalid_format(barcode if isinstance(barcode, str) else None)

        record = self._build_record(barcode, fields)

        with self._lock:
            replaced = barcode in self._records
            # An overwrite keeps the barcode's original position
            self._records[barcode] = record
            self._custom_ids.add(barcode)

        logger.info(f"{'Replaced' if replaced else 'Added'} catalog record {barcode}")
        return True

    def list_by_type(self, record_type: Any) -> List[CatalogRecord]:
        """
        List records of one type in insertion order.

        Unknown types give an empty list.
        """
        with self._lock:
            return [
                record.model_copy()
                for record in self._records.values()
                if record.type == record_type
            ]

    # =========================================================================
    # ID SUGGESTIONS
    # =========================================================================

    def expected_type(self, barcode: Any) -> Optional[str]:
        """Record type implied by the barcode prefix (advisory)."""
        return self._validator.expected_type(barcode)

    def generate_id(self, record_type: str) -> str:
        """
        Suggest an unused barcode for a record type.

        Args:
            record_type: "style" or "material"

        Returns:
            e.g. "STYLE-472"

        Raises:
            AppException: INVALID_FORMAT for unknown types
        """
        prefix = self._validator.prefix_for(str(record_type))
        if prefix is None:
            raise exceptions.invalid_format()

        with self._lock:
            taken = set(self._records)

        candidates = [
            f"{prefix}-{num}"
            for num in range(self.GENERATED_MIN, self.GENERATED_MAX + 1)
        ]
        free = [c for c in candidates if c not in taken]
        if free:
            return random.choice(free)

        # Three-digit range exhausted: continue with the next free number
        num = self.GENERATED_MAX + 1
        while f"{prefix}-{num}" in taken:
            num += 1
        return f"{prefix}-{num}"

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def custom_records(self) -> Dict[str, CatalogRecord]:
        """Records inserted after seeding, keyed by barcode."""
        with self._lock:
            return {
                barcode: self._records[barcode].model_copy()
                for barcode in self._records
                if barcode in self._custom_ids
            }

    def all_ids(self) -> List[str]:
        """All barcodes in insertion order."""
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, barcode: object) -> bool:
        with self._lock:
            return barcode in self._records

    def get_stats(self) -> Dict[str, Any]:
        """Get catalog statistics."""
        with self._lock:
            by_type: Dict[str, int] = {}
            for record in self._records.values():
                by_type[record.type] = by_type.get(record.type, 0) + 1

            return {
                "total_records": len(self._records),
                "custom_records": len(self._custom_ids),
                "by_type": by_type,
            }
