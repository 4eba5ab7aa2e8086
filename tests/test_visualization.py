"""
==============================================================================
Visualization Service Tests
==============================================================================

Tests for material swap descriptions.

==============================================================================
"""

import pytest

from furniture_visualizer.core.exceptions import AppException
from furniture_visualizer.services import VisualizationService


class TestCuratedDescriptions:
    """Tests for descriptions without a text generator."""

    def test_signature_pairing(self):
        """Test the sofa in grey linen has its own description."""
        result = VisualizationService().describe_swap("Modern Sectional Sofa", "Grey Linen Fabric")

        assert result.type == "enhanced-mock"
        assert "grey linen upholstery" in result.content
        assert result.style_name == "Modern Sectional Sofa"
        assert result.material_name == "Grey Linen Fabric"

    def test_style_default(self):
        """Test other materials on the sofa use the sofa description."""
        result = VisualizationService().describe_swap("Modern Sectional Sofa", "Velvet")
        assert "fresh character with Velvet" in result.content

    def test_generic_default(self):
        """Test unknown styles use the generic description."""
        result = VisualizationService().describe_swap("Leather Recliner", "Cream Boucle")
        assert result.content.startswith("Visualizing Leather Recliner with Cream Boucle")

    def test_placeholder_url_is_encoded(self):
        """Test names are URL-encoded in the placeholder image."""
        result = VisualizationService().describe_swap("Wing Chair", "Navy Velvet")
        assert "Wing%20Chair+with+Navy%20Velvet" in result.mock_image_url

    @pytest.mark.parametrize("style,material", [("", "Velvet"), ("Sofa", ""), (None, "Velvet")])
    def test_missing_selection(self, style, material):
        """Test both names are required."""
        with pytest.raises(AppException) as exc_info:
            VisualizationService().describe_swap(style, material)
        assert exc_info.value.code == "MISSING_SELECTION"
        assert exc_info.value.status_code == 400


class TestGeneratedDescriptions:
    """Tests for descriptions from a text generator."""

    def test_generator_receives_prompt(self):
        """Test the generator gets the designer prompt and its text is returned."""
        prompts = []

        def generator(prompt: str) -> str:
            prompts.append(prompt)
            return "A lovely chair."

        service = VisualizationService(generator)
        result = service.describe_swap("Wing Chair", "Navy Velvet")

        assert service.has_generator is True
        assert result.type == "ai-description"
        assert result.content == "A lovely chair."
        assert '"Wing Chair" would look with "Navy Velvet" upholstery' in prompts[0]

    def test_generator_failure(self):
        """Test generator errors surface as GENERATION_FAILED."""
        def generator(prompt: str) -> str:
            raise RuntimeError("provider unavailable")

        with pytest.raises(AppException) as exc_info:
            VisualizationService(generator).describe_swap("Wing Chair", "Navy Velvet")

        assert exc_info.value.code == "GENERATION_FAILED"
        assert exc_info.value.status_code == 502
        assert "provider unavailable" in exc_info.value.message
