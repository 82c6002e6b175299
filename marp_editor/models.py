"""
Data models for the Marp editor.
"""
import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, Tuple

logger = logging.getLogger(__name__)

# Style bounds, enforced by the StyleSettings setters
MIN_FONT_SIZE = 10
MAX_FONT_SIZE = 48
MIN_LINE_SPACING = 1.0
MAX_LINE_SPACING = 2.5

DEFAULT_ASPECT_RATIO = "16:9"
DEFAULT_FONT_SIZE = 32
DEFAULT_LINE_SPACING = 1.5


@dataclass(frozen=True)
class AspectRatio:
    """A slide aspect ratio as shown in the settings panel."""
    width: int
    height: int
    name: str


ASPECT_RATIOS: Dict[str, AspectRatio] = {
    "16:9": AspectRatio(16, 9, "16:9 (Widescreen)"),
    "4:3": AspectRatio(4, 3, "4:3 (Standard)"),
    "16:10": AspectRatio(16, 10, "16:10 (WUXGA)"),
}


def _clamp(value, low, high):
    return max(low, min(high, value))


class StyleSettings:
    """
    Deck-wide style settings.

    Values are only changed through the property setters, which clamp
    them into range. Anything reading the settings (layout, export) can
    therefore rely on them being valid.
    """

    def __init__(
        self,
        aspect_ratio: str = DEFAULT_ASPECT_RATIO,
        font_size: int = DEFAULT_FONT_SIZE,
        line_spacing: float = DEFAULT_LINE_SPACING,
    ):
        self._aspect_ratio = DEFAULT_ASPECT_RATIO
        self._font_size = DEFAULT_FONT_SIZE
        self._line_spacing = DEFAULT_LINE_SPACING
        self.aspect_ratio = aspect_ratio
        self.font_size = font_size
        self.line_spacing = line_spacing

    @property
    def aspect_ratio(self) -> str:
        return self._aspect_ratio

    @aspect_ratio.setter
    def aspect_ratio(self, key: str):
        if key not in ASPECT_RATIOS:
            logger.warning(f"Unknown aspect ratio '{key}', keeping {self._aspect_ratio}")
            return
        self._aspect_ratio = key

    @property
    def ratio(self) -> AspectRatio:
        return ASPECT_RATIOS[self._aspect_ratio]

    @property
    def font_size(self) -> int:
        return self._font_size

    @font_size.setter
    def font_size(self, value):
        self._font_size = int(_clamp(round(float(value)), MIN_FONT_SIZE, MAX_FONT_SIZE))

    @property
    def line_spacing(self) -> float:
        return self._line_spacing

    @line_spacing.setter
    def line_spacing(self, value):
        # Slider step is 0.1
        self._line_spacing = round(_clamp(float(value), MIN_LINE_SPACING, MAX_LINE_SPACING), 1)

    def key(self) -> Tuple[str, int, float]:
        """Hashable snapshot used as a memo key by the layout engine."""
        return (self._aspect_ratio, self._font_size, self._line_spacing)

    def copy(self) -> "StyleSettings":
        return StyleSettings(*self.key())

    def __eq__(self, other):
        if not isinstance(other, StyleSettings):
            return NotImplemented
        return self.key() == other.key()

    def __repr__(self):
        return (
            f"StyleSettings(aspect_ratio={self._aspect_ratio!r}, "
            f"font_size={self._font_size}, line_spacing={self._line_spacing})"
        )


@dataclass(frozen=True)
class ContentDimensions:
    """
    Pixel geometry of a slide and the author-facing capacity estimates.
    """
    slide_width: int
    slide_height: int
    content_width: int
    content_height: int
    chars_per_line: int
    lines_per_slide: int


def _new_slide_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Slide:
    """
    A single slide of the deck.

    ``id`` is assigned once and is the stable key across reorder and
    delete. ``revision`` is bumped on every content edit so cached
    renderings can tell they are stale.
    """
    kind: str
    text: str = ""
    id: str = field(default_factory=_new_slide_id)
    revision: int = 0

    def is_custom(self) -> bool:
        """Check if this slide was not created from a catalog template."""
        return self.kind == "custom"
