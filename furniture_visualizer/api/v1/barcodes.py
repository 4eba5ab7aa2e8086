"""
==============================================================================
Barcode Catalog Endpoints
==============================================================================

Lookup of scanned barcodes and admin assignment of catalog records.

==============================================================================
"""

import logging

from fastapi import APIRouter, Depends, Query

from furniture_visualizer.catalog import BarcodeCatalog, RecordType
from furniture_visualizer.core import exceptions
from furniture_visualizer.core.dependencies import (
    get_catalog,
    get_storage_service,
    require_admin_session,
)
from furniture_visualizer.schemas.catalog import BarcodeAssignRequest, GeneratedIdResponse
from furniture_visualizer.services.storage_service import StorageService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/barcodes", tags=["Barcodes"])


class BarcodeController:
    """Controller for catalog operations."""

    def __init__(self, catalog: BarcodeCatalog, storage: StorageService):
        self._catalog = catalog
        self._storage = storage

    def lookup(self, barcode: str) -> dict:
        """Resolve a scanned barcode, recording the scan when history is on."""
        if not self._catalog.is_valid_id(barcode):
            raise exceptions.invalid_format(barcode)

        record = self._catalog.lookup(barcode)
        if record is None:
            raise exceptions.barcode_not_found(barcode)

        if self._storage.load_user_preferences().save_history:
            self._storage.add_to_scan_history({
                "barcode": barcode,
                "name": record.name,
                "type": record.type,
            })

        return {"success": True, "record": record.to_dict()}

    def list_by_type(self, record_type: str) -> dict:
        """List records of one type."""
        records = self._catalog.list_by_type(record_type)
        return {
            "success": True,
            "type": record_type,
            "total": len(records),
            "records": [r.to_dict() for r in records]
        }

    def generate_id(self, record_type: RecordType) -> GeneratedIdResponse:
        """Suggest a free barcode."""
        return GeneratedIdResponse(
            barcode=self._catalog.generate_id(record_type.value),
            type=record_type
        )

    def assign(self, barcode: str, request: BarcodeAssignRequest) -> dict:
        """
        Store a record under a barcode and persist the custom entries.

        The record type must agree with the barcode prefix.
        """
        if not self._catalog.is_valid_id(barcode):
            raise exceptions.invalid_format(barcode)

        expected = self._catalog.expected_type(barcode)
        if request.type != expected:
            raise exceptions.type_mismatch(barcode, expected, request.type)

        replaced = barcode in self._catalog
        self._catalog.insert(barcode, request.to_fields())

        persisted = self._storage.save_custom_barcodes(self._catalog.custom_records())
        if not persisted:
            logger.warning(f"Record {barcode} stored in memory only")

        return {
            "success": True,
            "replaced": replaced,
            "persisted": persisted,
            "record": self._catalog.lookup(barcode).to_dict()
        }

    def get_stats(self) -> dict:
        """Get catalog statistics."""
        return {
            "success": True,
            "stats": self._catalog.get_stats()
        }


@router.get("")
async def list_records(
    type: str = Query(..., min_length=1, description="Record type: style or material"),
    catalog: BarcodeCatalog = Depends(get_catalog),
    storage: StorageService = Depends(get_storage_service)
):
    """List catalog records of one type."""
    controller = BarcodeController(catalog, storage)
    return controller.list_by_type(type)


@router.get("/stats")
async def get_catalog_stats(
    catalog: BarcodeCatalog = Depends(get_catalog),
    storage: StorageService = Depends(get_storage_service)
):
    """Get catalog statistics."""
    controller = BarcodeController(catalog, storage)
    return controller.get_stats()


@router.get("/generate-id", response_model=GeneratedIdResponse)
async def generate_barcode(
    type: RecordType = Query(..., description="Record type: style or material"),
    token: str = Depends(require_admin_session),
    catalog: BarcodeCatalog = Depends(get_catalog),
    storage: StorageService = Depends(get_storage_service)
):
    """Suggest an unused barcode for a new record."""
    controller = BarcodeController(catalog, storage)
    return controller.generate_id(type)


@router.get("/{barcode}")
async def lookup_barcode(
    barcode: str,
    catalog: BarcodeCatalog = Depends(get_catalog),
    storage: StorageService = Depends(get_storage_service)
):
    """Get the record stored under a scanned barcode."""
    controller = BarcodeController(catalog, storage)
    return controller.lookup(barcode)


@router.put("/{barcode}")
async def assign_barcode(
    barcode: str,
    request: BarcodeAssignRequest,
    token: str = Depends(require_admin_session),
    catalog: BarcodeCatalog = Depends(get_catalog),
    storage: StorageService = Depends(get_storage_service)
):
    """Create or replace the record stored under a barcode."""
    controller = BarcodeController(catalog, storage)
    return controller.assign(barcode, request)
