"""
==============================================================================
Preferences Endpoints
==============================================================================

Read and replace the stored user preferences.

==============================================================================
"""

from fastapi import APIRouter, Depends

from furniture_visualizer.core import exceptions
from furniture_visualizer.core.dependencies import get_storage_service
from furniture_visualizer.schemas.preferences import PreferencesResponse, UserPreferences
from furniture_visualizer.services.storage_service import StorageService


router = APIRouter(prefix="/preferences", tags=["Preferences"])


@router.get("", response_model=PreferencesResponse)
async def get_preferences(storage: StorageService = Depends(get_storage_service)):
    """Get user preferences, or the defaults when none are stored."""
    return PreferencesResponse(preferences=storage.load_user_preferences())


@router.put("", response_model=PreferencesResponse)
async def update_preferences(
    preferences: UserPreferences,
    storage: StorageService = Depends(get_storage_service)
):
    """Replace user preferences."""
    if not storage.save_user_preferences(preferences):
        raise exceptions.internal_error("Failed to save preferences")
    return PreferencesResponse(preferences=preferences)
