"""
==============================================================================
Visualization Service Module
==============================================================================

Describes how a furniture style would look in a given material.

The service builds the interior-designer prompt from the two record names
and hands it to a text generator: any callable taking the prompt and
returning text. Talking to a hosted model is the generator's business;
without one, a curated description is returned instead.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Callable, Optional
from urllib.parse import quote

from furniture_visualizer.core import exceptions
from furniture_visualizer.core.exceptions import AppException
from furniture_visualizer.schemas.visualization import SwapDescription


# Module logger
logger = logging.getLogger(__name__)

TextGenerator = Callable[[str], str]


PROMPT_TEMPLATE = """You are an expert interior designer and furniture visualizer.

A customer wants to see how a "{style}" would look with "{material}" upholstery.

Please provide:
1. A vivid, detailed description of how the furniture would look with this material
2. How the material's texture, color, and pattern would appear on the furniture
3. How light would interact with the material on this furniture piece
4. Any design recommendations or considerations

Be specific, visual, and help the customer imagine the final result clearly."""

CURATED_DESCRIPTIONS = {
    "Modern Sectional Sofa": {
        "Grey Linen Fabric": (
            "The modern sectional sofa transforms beautifully with grey linen "
            "upholstery. The fabric's natural texture adds warmth while the neutral "
            "grey tone creates a sophisticated, contemporary look. Light plays softly "
            "across the woven surface, creating subtle shadows in the tufted sections."
        ),
        None: (
            "The modern sectional sofa takes on a fresh character with {material}. "
            "The clean lines of the sofa complement the material's texture, while the "
            "spacious seating area showcases the fabric's quality and drape."
        ),
    },
    None: {
        None: (
            "Visualizing {style} with {material}: The furniture piece would feature "
            "the material's distinctive characteristics, with the upholstery conforming "
            "to the furniture's contours. The result combines the furniture's structural "
            "design with the material's unique texture and color properties."
        ),
    },
}


class VisualizationService:
    """
    Material swap descriptions.

    Attributes:
        _generator: Optional text generator for AI descriptions

    Example:
        >>> service = VisualizationService()
        >>> result = service.describe_swap("Leather Recliner", "Cream Boucle")
        >>> result.type
        'enhanced-mock'
    """

    PLACEHOLDER_URL = "https://via.placeholder.com/800x600/8B4513/FFFFFF?text={style}+with+{material}"

    def __init__(self, generator: Optional[TextGenerator] = None) -> None:
        self._generator = generator

    @property
    def has_generator(self) -> bool:
        return self._generator is not None

    @staticmethod
    def build_prompt(style_name: str, material_name: str) -> str:
        """Prompt sent to the text generator."""
        return PROMPT_TEMPLATE.format(style=style_name, material=material_name)

    def describe_swap(self, style_name: Optional[str], material_name: Optional[str]) -> SwapDescription:
        """
        Describe a style upholstered in a material.

        Raises:
            AppException: MISSING_SELECTION if either name is empty
            AppException: GENERATION_FAILED if the generator fails
        """
        if not style_name or not material_name:
            raise exceptions.missing_selection()

        if self._generator is None:
            return self._curated(style_name, material_name)

        prompt = self.build_prompt(style_name, material_name)
        try:
            content = self._generator(prompt)
        except AppException:
            raise
        except Exception as e:
            logger.error(f"Text generation failed: {e}")
            raise exceptions.generation_failed(str(e)) from e

        logger.info(f"Generated swap description: {style_name} / {material_name}")
        return SwapDescription(
            type="ai-description",
            content=content or "Unable to generate description",
            style_name=style_name,
            material_name=material_name,
            mock_image_url=self._placeholder(style_name, material_name),
            note="AI-generated description.",
        )

    def _curated(self, style_name: str, material_name: str) -> SwapDescription:
        by_material = CURATED_DESCRIPTIONS.get(style_name, CURATED_DESCRIPTIONS[None])
        template = by_material.get(material_name, by_material[None])

        return SwapDescription(
            type="enhanced-mock",
            content=template.format(style=style_name, material=material_name),
            style_name=style_name,
            material_name=material_name,
            mock_image_url=self._placeholder(style_name, material_name),
            note="Enhanced mock visualization. Configure a text generator for AI-powered descriptions.",
        )

    def _placeholder(self, style_name: str, material_name: str) -> str:
        return self.PLACEHOLDER_URL.format(
            style=quote(style_name, safe=""),
            material=quote(material_name, safe=""),
        )
