"""
==============================================================================
Catalog Schemas Module
==============================================================================

Request and response schemas for barcode catalog endpoints.

==============================================================================
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from furniture_visualizer.catalog.models import RecordType


class BarcodeAssignRequest(BaseModel):
    """
    Fields to store under a barcode.

    Unknown keys are kept and stored with the record.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, use_enum_values=True)

    type: RecordType
    name: str = Field(..., min_length=1, max_length=200)
    image_url: str = Field(default="", alias="imageUrl")
    description: Optional[str] = Field(default=None, max_length=2000)

    def to_fields(self) -> dict:
        """Record fields, without the barcode itself."""
        fields = self.model_dump(exclude_none=True)
        fields.pop("id", None)
        return fields


class GeneratedIdResponse(BaseModel):
    """Suggested free barcode for a new record."""
    success: bool = Field(default=True)
    barcode: str
    type: RecordType
