"""
==============================================================================
Visualization Schemas Module
==============================================================================

Request and response schemas for material swap descriptions.

==============================================================================
"""

from pydantic import BaseModel, Field


class VisualizeRequest(BaseModel):
    """Barcodes of the style and the material to combine."""
    style_id: str = Field(..., min_length=1)
    material_id: str = Field(..., min_length=1)


class SwapDescription(BaseModel):
    """Description of a style upholstered in a material."""
    type: str
    content: str
    style_name: str
    material_name: str
    mock_image_url: str
    note: str


class VisualizeResponse(BaseModel):
    """Swap description wrapped in the standard envelope."""
    success: bool = Field(default=True)
    result: SwapDescription
