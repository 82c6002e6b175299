"""
Preview scale engine.

Keeps the preview's fit scale current from the observed container size and
the slide dimensions, and layers the zoom state machine on top of it:

* ``"fit"``  - the preview follows the fit scale;
* a float    - manual zoom, clamped to ``[MIN_ZOOM, MAX_ZOOM]``.

The fit scale is recomputed from scratch on every observation, also while
zoom is manual, so switching back to fit never waits for a resize.
"""
import logging
from typing import Callable, List, Optional, Protocol, Tuple, Union

from .models import ContentDimensions

logger = logging.getLogger(__name__)

FIT = "fit"
ZOOM_STEP = 0.1
MIN_ZOOM = 0.1
MAX_ZOOM = 3.0
MIN_FIT_SCALE = 0.01
# Breathing room kept around the slide inside the preview container (px)
CONTAINER_MARGIN = 16

ZoomLevel = Union[str, float]
SizeCallback = Callable[[float, float], None]


class SizeSource(Protocol):
    """Anything that reports a container's size as it changes."""

    def subscribe(self, callback: SizeCallback) -> Callable[[], None]:
        ...


class ContainerSize:
    """
    Minimal in-process size signal.

    Stands in for the platform size watcher: ``resize`` pushes a new box to
    every subscriber, ``subscribe`` returns the matching unsubscribe call.
    New subscribers are called immediately with the current size, unless
    no size has been set yet.
    """

    def __init__(self, width: float = 0, height: float = 0):
        self.width = width
        self.height = height
        self._callbacks: List[SizeCallback] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)

    def subscribe(self, callback: SizeCallback) -> Callable[[], None]:
        self._callbacks.append(callback)
        if self.width > 0 and self.height > 0:
            callback(self.width, self.height)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        for callback in list(self._callbacks):
            callback(width, height)


def fit_scale(available: Tuple[float, float], dims: ContentDimensions,
              margin: float = CONTAINER_MARGIN) -> float:
    """Largest scale at which the slide fits inside *available*."""
    width, height = available
    scale_x = (width - margin) / dims.slide_width
    scale_y = (height - margin) / dims.slide_height
    return max(MIN_FIT_SCALE, min(scale_x, scale_y))


class ScaleEngine:
    """
    Fit scale tracking plus zoom state.

    Args:
        dims: Initial slide dimensions
        margin: Pixels kept free around the slide in the container
    """

    def __init__(self, dims: ContentDimensions, margin: float = CONTAINER_MARGIN):
        self.dims = dims
        self.margin = margin
        self.zoom_level: ZoomLevel = FIT
        self.fit_scale = 1.0
        self._available: Optional[Tuple[float, float]] = None
        self._source: Optional[SizeSource] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------
    def attach(self, source: SizeSource) -> None:
        """Subscribe to *source*; one subscription per live source."""
        if source is self._source:
            return
        self.detach()
        self._source = source
        self._unsubscribe = source.subscribe(self.observe)
        logger.debug("Scale engine attached to container")

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            logger.debug("Scale engine detached from container")
        self._unsubscribe = None
        self._source = None

    @property
    def attached(self) -> bool:
        return self._source is not None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.detach()
        return False

    def observe(self, width: float, height: float) -> None:
        """Size callback: recompute the fit scale for the new box."""
        self._available = (width, height)
        self._recompute()

    def set_dimensions(self, dims: ContentDimensions) -> None:
        self.dims = dims
        self._recompute()

    def _recompute(self) -> None:
        if self._available is None:
            return
        if not self.dims.slide_width or not self.dims.slide_height:
            return
        self.fit_scale = fit_scale(self._available, self.dims, self.margin)

    # ------------------------------------------------------------------
    # Zoom
    # ------------------------------------------------------------------
    @property
    def is_fit(self) -> bool:
        return self.zoom_level == FIT

    @property
    def effective_scale(self) -> float:
        if self.is_fit:
            return self.fit_scale
        return self.zoom_level

    def zoom_in(self) -> float:
        self.zoom_level = min(MAX_ZOOM, self.effective_scale + ZOOM_STEP)
        return self.zoom_level

    def zoom_out(self) -> float:
        self.zoom_level = max(MIN_ZOOM, self.effective_scale - ZOOM_STEP)
        return self.zoom_level

    def zoom_fit(self) -> float:
        self.zoom_level = FIT
        return self.fit_scale

    def set_zoom(self, value: float) -> float:
        self.zoom_level = max(MIN_ZOOM, min(MAX_ZOOM, float(value)))
        return self.zoom_level

    def freeze(self) -> None:
        """
        Pin a fit zoom to the current fit scale.

        Called before a panel resize so that shrinking the preview panel
        does not also shrink the slide.
        """
        if self.is_fit:
            self.zoom_level = self.fit_scale
            logger.debug(f"Zoom frozen at {self.fit_scale:.3f}")

    def zoom_label(self) -> str:
        return f"{round(self.effective_scale * 100)}%"
