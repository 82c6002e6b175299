"""
Deck model: the ordered slides of a presentation and the current selection.
"""
import logging
from typing import Iterator, List, Optional, Tuple

from .models import Slide
from .templates import CUSTOM_KIND, INITIAL_SLIDE_TEXT, display_name, get_template

logger = logging.getLogger(__name__)


class Deck:
    """
    Ordered collection of slides with a selection index.

    Invariants kept by every operation:

    * the deck always holds at least one slide;
    * ``0 <= selected_index < len(deck)``.

    Invalid indices and degenerate requests (deleting the last slide,
    reordering without a source) are no-ops, never errors. Mutating
    operations return whether they changed anything.
    """

    def __init__(self, slides: Optional[List[Slide]] = None):
        if slides:
            self._slides: List[Slide] = list(slides)
        else:
            self._slides = [Slide(kind="cover", text=INITIAL_SLIDE_TEXT)]
        self._selected = 0

    @classmethod
    def from_texts(cls, texts: List[str], kind: str = CUSTOM_KIND) -> "Deck":
        """Build a deck from raw slide markdown, one string per slide."""
        return cls([Slide(kind=kind, text=text) for text in texts])

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._slides)

    def __iter__(self) -> Iterator[Slide]:
        return iter(tuple(self._slides))

    def __getitem__(self, index: int) -> Slide:
        return self._slides[index]

    @property
    def slides(self) -> Tuple[Slide, ...]:
        return tuple(self._slides)

    @property
    def selected_index(self) -> int:
        return self._selected

    @property
    def selected_slide(self) -> Slide:
        return self._slides[self._selected]

    def ids(self) -> List[str]:
        return [slide.id for slide in self._slides]

    def label_for(self, index: int) -> str:
        """Catalog display name of the slide at *index* (``Custom Slide`` otherwise)."""
        if not self._in_range(index):
            return ""
        return display_name(self._slides[index].kind)

    def _in_range(self, index) -> bool:
        return isinstance(index, int) and 0 <= index < len(self._slides)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add_slide(self, kind: str) -> Slide:
        """
        Append a slide seeded from the template catalog and select it.

        Unknown kinds produce an empty ``custom`` slide.
        """
        template = get_template(kind)
        if template is None:
            logger.debug(f"Unknown slide kind '{kind}', adding a custom slide")
            slide = Slide(kind=CUSTOM_KIND, text="")
        else:
            slide = Slide(kind=kind, text=template.content)

        self._slides.append(slide)
        self._selected = len(self._slides) - 1
        return slide

    def update_content(self, index: int, text: str) -> bool:
        """Replace the markdown of the slide at *index*."""
        if not self._in_range(index):
            logger.debug(f"update_content ignored, index {index} out of range")
            return False
        slide = self._slides[index]
        slide.text = text
        slide.revision += 1
        return True

    def update_selected(self, text: str) -> bool:
        """Replace the markdown of the selected slide."""
        return self.update_content(self._selected, text)

    def delete_slide(self, index: int) -> bool:
        """
        Remove the slide at *index*.

        The sole remaining slide is never removed. Selection steps back by
        one when the deleted slide was at or before it.
        """
        if len(self._slides) <= 1:
            logger.debug("delete_slide ignored, deck must keep one slide")
            return False
        if not self._in_range(index):
            logger.debug(f"delete_slide ignored, index {index} out of range")
            return False

        del self._slides[index]
        if index <= self._selected:
            self._selected = max(0, self._selected - 1)
        return True

    def reorder(self, from_index: Optional[int], to_index: Optional[int]) -> bool:
        """
        Move the slide at *from_index* to *to_index*.

        *to_index* is a position in the sequence left after removing the
        moved slide. The selection follows the moved slide.
        """
        if from_index is None:
            logger.debug("reorder ignored, no move in progress")
            return False
        if not (self._in_range(from_index) and self._in_range(to_index)):
            logger.debug(f"reorder ignored, indices {from_index} -> {to_index} out of range")
            return False

        slide = self._slides.pop(from_index)
        self._slides.insert(to_index, slide)
        self._selected = to_index
        return True

    def select_slide(self, index: int) -> bool:
        if not self._in_range(index):
            return False
        self._selected = index
        return True
