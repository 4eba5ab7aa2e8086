"""
==============================================================================
Preferences & History Schemas Module
==============================================================================

User preferences and scan history payloads.

==============================================================================
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class UserPreferences(BaseModel):
    """User preferences with their defaults."""

    model_config = ConfigDict(extra="ignore")

    dark_mode: bool = Field(default=False)
    auto_scan: bool = Field(default=True)
    save_history: bool = Field(default=True)


class PreferencesResponse(BaseModel):
    """Preferences wrapped in the standard envelope."""
    success: bool = Field(default=True)
    preferences: UserPreferences


class ScanHistoryResponse(BaseModel):
    """Scan history, newest first."""
    success: bool = Field(default=True)
    total: int = Field(ge=0)
    scans: List[Dict[str, Any]]
