#!/usr/bin/env python3
"""Layout engine: slide pixel geometry and content capacity estimates."""

import logging
import math
from typing import List, Optional, Tuple

from .models import ContentDimensions, StyleSettings

logger = logging.getLogger(__name__)

# Fixed canvas width; height follows the aspect ratio
BASE_SLIDE_WIDTH = 1280
# Share of the slide left for content once padding is taken off
CONTENT_SHARE = 0.8
# Rough average glyph width as a fraction of the font size
CHAR_WIDTH_FACTOR = 0.6


def calculate_content_dimensions(settings: StyleSettings) -> ContentDimensions:
    """
    Compute slide and content-area dimensions for *settings*.

    The character and line counts are guidance for the author only; text
    is never reflowed with them.

    Args:
        settings: Current deck style settings

    Returns:
        ContentDimensions for the settings
    """
    ratio = settings.ratio
    slide_width = BASE_SLIDE_WIDTH
    slide_height = slide_width * ratio.height / ratio.width

    content_width = round(slide_width * CONTENT_SHARE)
    content_height = round(slide_height * CONTENT_SHARE)

    avg_char_width = settings.font_size * CHAR_WIDTH_FACTOR
    line_height = settings.font_size * settings.line_spacing

    return ContentDimensions(
        slide_width=slide_width,
        slide_height=round(slide_height),
        content_width=content_width,
        content_height=content_height,
        chars_per_line=math.floor(content_width / avg_char_width),
        lines_per_slide=math.floor(content_height / line_height),
    )


class LayoutEngine:
    """
    Memoizing front for :func:`calculate_content_dimensions`.

    Only the last computed input is remembered; any settings change
    produces a fresh result.
    """

    def __init__(self, debug: bool = False):
        self.debug = debug
        self._last_key: Optional[Tuple[str, int, float]] = None
        self._last_dims: Optional[ContentDimensions] = None

    def dimensions(self, settings: StyleSettings) -> ContentDimensions:
        key = settings.key()
        if key == self._last_key and self._last_dims is not None:
            return self._last_dims

        dims = calculate_content_dimensions(settings)
        if self.debug:
            logger.debug(f"📐 Layout for {key}: {dims}")
        self._last_key = key
        self._last_dims = dims
        return dims

    def guidelines(self, settings: StyleSettings) -> List[str]:
        """Author-facing content guidelines for the settings panel."""
        dims = self.dimensions(settings)
        return [
            f"Slide Size: {dims.slide_width} × {dims.slide_height}px",
            f"Content Area: {dims.content_width} × {dims.content_height}px",
            f"Est. Chars/Line: ~{dims.chars_per_line}",
            f"Est. Lines/Slide: ~{dims.lines_per_slide}",
        ]
