"""Pointer drag sessions: panel resize, sidebar resize and slide reorder.

A drag owns process-wide pointer listeners and the drag cursor for as long
as it lives. Sessions are context managers, so listeners are removed and
the cursor restored on every exit path, including exceptions.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .deck import Deck
from .scale_engine import ScaleEngine

logger = logging.getLogger(__name__)

MOVE = "move"
RELEASE = "release"

MIN_EDITOR_RATIO = 0.1
MAX_EDITOR_RATIO = 0.9
MIN_SIDEBAR_WIDTH = 200
MAX_SIDEBAR_WIDTH = 500


@dataclass(frozen=True)
class PointerEvent:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    width: float
    height: float


PointerListener = Callable[[PointerEvent], None]


class PointerTracker:
    """Process-wide pointer listeners and the transient cursor indicator."""

    def __init__(self):
        self.cursor = ""
        self._listeners: Dict[str, List[PointerListener]] = {MOVE: [], RELEASE: []}

    def add_listener(self, kind: str, listener: PointerListener) -> None:
        self._listeners[kind].append(listener)

    def remove_listener(self, kind: str, listener: PointerListener) -> None:
        if listener in self._listeners[kind]:
            self._listeners[kind].remove(listener)

    def listener_count(self, kind: Optional[str] = None) -> int:
        if kind is not None:
            return len(self._listeners[kind])
        return sum(len(listeners) for listeners in self._listeners.values())

    def dispatch(self, kind: str, event: PointerEvent) -> None:
        for listener in list(self._listeners[kind]):
            listener(event)

    def move(self, x: float, y: float) -> None:
        self.dispatch(MOVE, PointerEvent(x, y))

    def release(self, x: float = 0, y: float = 0) -> None:
        self.dispatch(RELEASE, PointerEvent(x, y))


class DragSession:
    """
    One pointer gesture.

    ``begin`` attaches the move/release listeners and sets the cursor;
    ``release`` undoes both and may be called any number of times.
    """

    cursor = "col-resize"

    def __init__(self, tracker: PointerTracker, on_end: Optional[Callable[["DragSession"], None]] = None):
        self.tracker = tracker
        self.active = False
        self._on_end = on_end
        self._saved_cursor = ""

    def begin(self) -> "DragSession":
        self._saved_cursor = self.tracker.cursor
        self.tracker.cursor = self.cursor
        self.tracker.add_listener(MOVE, self._handle_move)
        self.tracker.add_listener(RELEASE, self._handle_release)
        self.active = True
        return self

    def release(self) -> None:
        if not self.active:
            return
        self.active = False
        self.tracker.remove_listener(MOVE, self._handle_move)
        self.tracker.remove_listener(RELEASE, self._handle_release)
        self.tracker.cursor = self._saved_cursor
        if self._on_end is not None:
            self._on_end(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False

    def _handle_move(self, event: PointerEvent) -> None:
        self.on_move(event)

    def _handle_release(self, event: PointerEvent) -> None:
        self.release()

    def on_move(self, event: PointerEvent) -> None:
        pass


class PanelResizeSession(DragSession):
    """Drag of the editor/preview split."""

    def __init__(self, tracker, container: Rect, horizontal: bool = True,
                 on_ratio: Optional[Callable[[float], None]] = None, on_end=None):
        super().__init__(tracker, on_end)
        self.container = container
        self.horizontal = horizontal
        self.cursor = "col-resize" if horizontal else "row-resize"
        self.ratio: Optional[float] = None
        self._on_ratio = on_ratio

    def on_move(self, event: PointerEvent) -> None:
        if self.horizontal:
            ratio = (event.x - self.container.left) / self.container.width
        else:
            ratio = (event.y - self.container.top) / self.container.height

        if MIN_EDITOR_RATIO <= ratio <= MAX_EDITOR_RATIO:
            self.ratio = ratio
            if self._on_ratio is not None:
                self._on_ratio(ratio)


class SidebarResizeSession(DragSession):
    """Drag of the sidebar's right edge."""

    def __init__(self, tracker, start_x: float, start_width: float,
                 on_width: Optional[Callable[[float], None]] = None, on_end=None):
        super().__init__(tracker, on_end)
        self.start_x = start_x
        self.start_width = start_width
        self.width = start_width
        self._on_width = on_width

    def on_move(self, event: PointerEvent) -> None:
        width = self.start_width + event.x - self.start_x
        if MIN_SIDEBAR_WIDTH <= width <= MAX_SIDEBAR_WIDTH:
            self.width = width
            if self._on_width is not None:
                self._on_width(width)


class ReorderSession(DragSession):
    """Drag of a slide thumbnail; ``drop`` moves the slide."""

    cursor = "move"

    def __init__(self, tracker, deck: Deck, source_index: int, on_end=None):
        super().__init__(tracker, on_end)
        self.deck = deck
        self.source_index = source_index

    def drop(self, target_index: int) -> bool:
        if not self.active:
            return False
        try:
            return self.deck.reorder(self.source_index, target_index)
        finally:
            self.release()


class GestureController:
    """
    Starts drag sessions, at most one at a time.

    A start request while another gesture is live is refused and returns
    None.
    """

    def __init__(self, tracker: Optional[PointerTracker] = None):
        self.tracker = tracker or PointerTracker()
        self.active: Optional[DragSession] = None

    def _start(self, session: DragSession) -> Optional[DragSession]:
        if self.active is not None and self.active.active:
            logger.warning(f"Ignoring {type(session).__name__}, another drag is in progress")
            return None
        self.active = session.begin()
        return session

    def _ended(self, session: DragSession) -> None:
        if self.active is session:
            self.active = None

    def start_panel_resize(self, scale: ScaleEngine, container: Optional[Rect], horizontal: bool = True,
                           on_ratio=None) -> Optional[PanelResizeSession]:
        """
        Begin resizing the editor/preview split.

        The preview zoom is frozen first, even when there is no container
        to resize. A start refused because another drag is live leaves the
        zoom untouched.
        """
        if self.busy:
            logger.warning("Ignoring PanelResizeSession, another drag is in progress")
            return None
        scale.freeze()
        if container is None:
            logger.debug("Panel resize ignored, no container")
            return None
        session = PanelResizeSession(self.tracker, container, horizontal, on_ratio, on_end=self._ended)
        return self._start(session)

    def start_sidebar_resize(self, start_x: float, start_width: float,
                             on_width=None) -> Optional[SidebarResizeSession]:
        session = SidebarResizeSession(self.tracker, start_x, start_width, on_width, on_end=self._ended)
        return self._start(session)

    def start_reorder(self, deck: Deck, source_index: int) -> Optional[ReorderSession]:
        if not 0 <= source_index < len(deck):
            logger.debug(f"Reorder drag ignored, index {source_index} out of range")
            return None
        return self._start(ReorderSession(self.tracker, deck, source_index, on_end=self._ended))

    def drop(self, deck: Deck, target_index: int) -> bool:
        """Finish a reorder drag on *target_index*; no-op without one."""
        session = self.active if isinstance(self.active, ReorderSession) else None
        if session is None:
            return deck.reorder(None, target_index)
        return session.drop(target_index)

    def cancel(self) -> None:
        """Abandon whatever gesture is live, restoring global state."""
        if self.active is not None:
            self.active.release()
        self.active = None

    @property
    def busy(self) -> bool:
        return self.active is not None and self.active.active
