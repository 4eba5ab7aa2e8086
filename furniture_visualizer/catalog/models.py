"""
==============================================================================
Catalog Models Module
==============================================================================

Pydantic models for barcode-addressed catalog records.

==============================================================================
"""

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RecordType(str, enum.Enum):
    """
    Catalog record type.

    - STYLE: a furniture piece (sofa, armchair, ...)
    - MATERIAL: an upholstery material or fabric

    The enum inherits from str so records compare equal to plain strings.
    """

    STYLE = "style"
    MATERIAL = "material"

    def __str__(self) -> str:
        return self.value


class CatalogRecord(BaseModel):
    """
    Catalog record addressed by its barcode.

    Attributes:
        id: Barcode identifier (STYLE-### or MAT-###)
        type: Record type, normally "style" or "material"
        name: Display name
        description: Optional free text

    The record holds exactly the fields it was stored with. Nothing is
    checked or defaulted beyond the id; extra fields such as image_url
    are kept as-is and missing ones stay unset.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Barcode identifier")
    type: Any = Field(default=None, description="Record type")
    name: Any = Field(default=None, description="Display name")
    description: Any = Field(default=None, description="Free text description")

    def to_dict(self) -> dict:
        """Serialize only the fields the record was stored with."""
        return self.model_dump(exclude_unset=True)
