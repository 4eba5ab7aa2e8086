"""
==============================================================================
Scan History Endpoints
==============================================================================

Recent barcode lookups, newest first.

==============================================================================
"""

from fastapi import APIRouter, Depends, Query

from furniture_visualizer.core import exceptions
from furniture_visualizer.core.dependencies import get_storage_service
from furniture_visualizer.schemas.common import MessageResponse
from furniture_visualizer.schemas.preferences import ScanHistoryResponse
from furniture_visualizer.services.storage_service import StorageService


router = APIRouter(prefix="/history", tags=["History"])


@router.get("", response_model=ScanHistoryResponse)
async def get_history(
    limit: int = Query(50, ge=1, le=500),
    storage: StorageService = Depends(get_storage_service)
):
    """Get recent scans."""
    scans = storage.get_scan_history()
    return ScanHistoryResponse(total=len(scans), scans=scans[:limit])


@router.delete("", response_model=MessageResponse)
async def clear_history(storage: StorageService = Depends(get_storage_service)):
    """Delete the scan history."""
    if not storage.clear_scan_history():
        raise exceptions.internal_error("Failed to clear scan history")
    return MessageResponse(message="Scan history cleared")
