"""
==============================================================================
Visualization Endpoints
==============================================================================

Describe a scanned furniture style upholstered in a scanned material.

==============================================================================
"""

from fastapi import APIRouter, Depends

from furniture_visualizer.catalog import BarcodeCatalog, CatalogRecord, RecordType
from furniture_visualizer.core import exceptions
from furniture_visualizer.core.dependencies import get_catalog, get_visualization_service
from furniture_visualizer.schemas.visualization import VisualizeRequest, VisualizeResponse
from furniture_visualizer.services.visualization_service import VisualizationService


router = APIRouter(prefix="/visualize", tags=["Visualization"])


class VisualizationController:
    """Controller for swap descriptions."""

    def __init__(self, catalog: BarcodeCatalog, service: VisualizationService):
        self._catalog = catalog
        self._service = service

    def resolve(self, barcode: str, record_type: RecordType) -> CatalogRecord:
        """Look up a barcode that must hold a record of the given type."""
        if not self._catalog.is_valid_id(barcode):
            raise exceptions.invalid_format(barcode)

        record = self._catalog.lookup(barcode)
        if record is None:
            raise exceptions.barcode_not_found(barcode)

        if record.type != record_type.value:
            raise exceptions.type_mismatch(barcode, record_type.value, record.type)
        return record

    def visualize(self, request: VisualizeRequest) -> VisualizeResponse:
        style = self.resolve(request.style_id, RecordType.STYLE)
        material = self.resolve(request.material_id, RecordType.MATERIAL)
        return VisualizeResponse(result=self._service.describe_swap(style.name, material.name))


@router.post("", response_model=VisualizeResponse)
async def visualize(
    request: VisualizeRequest,
    catalog: BarcodeCatalog = Depends(get_catalog),
    service: VisualizationService = Depends(get_visualization_service)
):
    """Describe how the style would look in the material."""
    controller = VisualizationController(catalog, service)
    return controller.visualize(request)
