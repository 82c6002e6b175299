"""Editing core for Marp slide decks.

The package root re-exports the deck model, the preview renderer, the layout
and scale engines and the Marp reader/writer. Importing it also gives the
root logger a plain console handler when nothing else configured one; set
``MARPEDIT_LOG_LEVEL`` (``DEBUG``, ``WARNING``, ...) to change its level.
"""

from __future__ import annotations

import logging
import os

_level = os.getenv("MARPEDIT_LOG_LEVEL", "INFO").upper()
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=_level,
        format="%(asctime)s %(levelname)-7s %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )

from .deck import Deck  # noqa: E402
from .editor import MarpEditor, Preview  # noqa: E402
from .layout_engine import LayoutEngine, calculate_content_dimensions  # noqa: E402
from .markdown_parser import MarkdownParser, render  # noqa: E402
from .marp_writer import generate_marp, parse_marp  # noqa: E402
from .models import ContentDimensions, Slide, StyleSettings  # noqa: E402
from .scale_engine import FIT, ContainerSize, ScaleEngine  # noqa: E402

__all__ = [
    "MarpEditor",
    "Preview",
    "Deck",
    "Slide",
    "StyleSettings",
    "ContentDimensions",
    "LayoutEngine",
    "calculate_content_dimensions",
    "MarkdownParser",
    "render",
    "generate_marp",
    "parse_marp",
    "ScaleEngine",
    "ContainerSize",
    "FIT",
]
