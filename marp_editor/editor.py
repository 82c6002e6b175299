#!/usr/bin/env python3
"""
Editor session tying together the deck, renderer, layout and scale engines.
"""

import html
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .deck import Deck
from .gestures import GestureController, PanelResizeSession, Rect
from .layout_engine import LayoutEngine
from .markdown_parser import MarkdownParser
from .marp_writer import generate_marp, read_marp, write_marp
from .models import ASPECT_RATIOS, ContentDimensions, StyleSettings
from .scale_engine import ScaleEngine, SizeSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Preview:
    """Everything needed to draw the selected slide in the preview pane."""
    html: str
    width: int
    height: int
    scale: float
    font_size: int
    line_spacing: float

    def transform(self) -> str:
        return f"scale({self.scale})"


class MarpEditor:
    """
    Main editing session.

    Owns the deck and the deck-wide style settings, and keeps the layout
    and scale engines in step with them.
    """

    def __init__(
        self,
        *,
        deck: Optional[Deck] = None,
        settings: Optional[StyleSettings] = None,
        flavor: str = "simple",
        debug: bool = False,
    ):
        """Create a new :class:`MarpEditor`.

        Parameters
        ----------
        deck
            Starting deck. A fresh deck with a single cover slide is used
            when omitted.
        settings
            Deck style settings; defaults to 16:9, 32px, 1.5.
        flavor
            Markdown flavour for the preview (``simple`` or ``gfm``).
        debug
            Enable verbose logging.
        """
        self.debug = debug
        self.deck = deck or Deck()
        self.settings = settings or StyleSettings()
        self.parser = MarkdownParser(flavor=flavor)
        self.layout_engine = LayoutEngine(debug=debug)
        self.scale_engine = ScaleEngine(self.dimensions)
        self.gestures = GestureController()
        self.editor_ratio = 0.5
        self.sidebar_width = 256
        self._render_cache: Dict[str, Tuple[int, str]] = {}

    @classmethod
    def from_file(cls, path, **kwargs) -> "MarpEditor":
        texts, settings = read_marp(path)
        return cls(deck=Deck.from_texts(texts), settings=settings, **kwargs)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    @property
    def dimensions(self) -> ContentDimensions:
        return self.layout_engine.dimensions(self.settings)

    def _settings_changed(self) -> None:
        self.scale_engine.set_dimensions(self.dimensions)

    def set_aspect_ratio(self, key: str) -> None:
        self.settings.aspect_ratio = key
        self._settings_changed()

    def set_font_size(self, value) -> None:
        self.settings.font_size = value
        self._settings_changed()

    def set_line_spacing(self, value) -> None:
        self.settings.line_spacing = value
        self._settings_changed()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render_slide(self, index: int) -> str:
        """Sanitized HTML of the slide at *index*, cached per revision."""
        # Forget slides that have been deleted
        if len(self._render_cache) > len(self.deck):
            live = set(self.deck.ids())
            for slide_id in [key for key in self._render_cache if key not in live]:
                del self._render_cache[slide_id]

        slide = self.deck[index]
        cached = self._render_cache.get(slide.id)
        if cached is not None and cached[0] == slide.revision:
            return cached[1]

        rendered = self.parser.parse(slide.text)
        self._render_cache[slide.id] = (slide.revision, rendered)
        return rendered

    def current_html(self) -> str:
        return self.render_slide(self.deck.selected_index)

    def attach_preview(self, source: SizeSource) -> None:
        self.scale_engine.attach(source)

    def close(self) -> None:
        self.gestures.cancel()
        self.scale_engine.detach()

    def preview(self) -> Preview:
        dims = self.dimensions
        return Preview(
            html=self.current_html(),
            width=dims.slide_width,
            height=dims.slide_height,
            scale=self.scale_engine.effective_scale,
            font_size=self.settings.font_size,
            line_spacing=self.settings.line_spacing,
        )

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------
    def start_editor_resize(self, container: Optional[Rect], horizontal: bool = True) -> Optional[PanelResizeSession]:
        def _set_ratio(ratio: float) -> None:
            self.editor_ratio = ratio

        return self.gestures.start_panel_resize(self.scale_engine, container, horizontal, on_ratio=_set_ratio)

    def start_sidebar_resize(self, start_x: float):
        def _set_width(width: float) -> None:
            self.sidebar_width = width

        return self.gestures.start_sidebar_resize(start_x, self.sidebar_width, on_width=_set_width)

    def start_slide_drag(self, index: int):
        return self.gestures.start_reorder(self.deck, index)

    def drop_slide(self, index: int) -> bool:
        return self.gestures.drop(self.deck, index)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def export(self) -> str:
        return generate_marp(self.deck, self.settings)

    def save(self, path) -> Path:
        return write_marp(path, self.deck, self.settings)

    def preview_document(self) -> str:
        """Standalone HTML page showing every slide at full size."""
        dims = self.dimensions
        sections: List[str] = []
        for index in range(len(self.deck)):
            label = html.escape(self.deck.label_for(index))
            sections.append(
                f'<section class="slide" data-index="{index + 1}" title="{label}">'
                f"{self.render_slide(index)}</section>"
            )

        css = (
            "body { background: #e5e7eb; margin: 0; padding: 2rem; }\n"
            f".slide {{ width: {dims.slide_width}px; height: {dims.slide_height}px; "
            "box-sizing: border-box; padding: 10%; margin: 0 auto 2rem; background: #fff; "
            f"overflow: hidden; font-size: {self.settings.font_size}px; "
            f"line-height: {self.settings.line_spacing:g}; }}\n"
            ".columns { display: flex; gap: 2rem; }\n"
            ".columns > .col { flex: 1; }\n"
        )
        return (
            "<!DOCTYPE html>\n<html>\n<head>\n<meta charset=\"utf-8\">\n"
            f"<title>Preview</title>\n<style>\n{css}</style>\n</head>\n<body>\n"
            + "\n".join(sections)
            + "\n</body>\n</html>\n"
        )


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point: rebuild a deck from markdown and export it."""
    import argparse

    def _build_parser() -> argparse.ArgumentParser:
        p = argparse.ArgumentParser(prog="marpedit", description="Normalize a Markdown deck into a Marp presentation.")
        p.add_argument("source", type=Path, help="Markdown/Marp file, slides separated by '---' lines")
        p.add_argument("--output", "-o", type=Path, default=Path("output/presentation.md"), help="Destination Marp file")
        p.add_argument("--aspect-ratio", "-a", choices=sorted(ASPECT_RATIOS), help="Slide aspect ratio")
        p.add_argument("--font-size", type=float, help="Content font size in px (10-48)")
        p.add_argument("--line-spacing", type=float, help="Content line spacing (1.0-2.5)")
        p.add_argument("--flavor", choices=("simple", "gfm"), default="simple", help="Markdown flavour for the preview")
        p.add_argument("--preview", type=Path, help="Also write an HTML preview of every slide")
        p.add_argument("--debug", action="store_true", help="Enable verbose logging")
        return p

    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO, format="%(levelname)s  %(message)s")

    if not args.source.exists():
        logger.error(f"Markdown file '{args.source}' not found")
        return 1

    try:
        editor = MarpEditor.from_file(args.source, flavor=args.flavor, debug=args.debug)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error(f"Could not read '{args.source}': {exc}")
        return 1

    if args.aspect_ratio:
        editor.set_aspect_ratio(args.aspect_ratio)
    if args.font_size is not None:
        editor.set_font_size(args.font_size)
    if args.line_spacing is not None:
        editor.set_line_spacing(args.line_spacing)

    if args.debug:
        for line in editor.layout_engine.guidelines(editor.settings):
            logger.debug(line)

    output_path = editor.save(args.output)
    if args.preview:
        args.preview.parent.mkdir(parents=True, exist_ok=True)
        args.preview.write_text(editor.preview_document(), encoding="utf-8")
        logger.info(f"Preview written to {args.preview}")

    logger.info("✅ Presentation written to %s", output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
