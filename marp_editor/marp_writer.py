"""
Marp document export and import.

The exported document is a front-matter block, a ``<style>`` block carrying
the deck's style settings, then each slide's markdown separated by
``---`` lines.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Tuple

from markdown_it import MarkdownIt
from mdit_py_plugins.front_matter import front_matter_plugin

from .deck import Deck
from .models import ASPECT_RATIOS, StyleSettings

logger = logging.getLogger(__name__)

__all__ = ["SLIDE_SEPARATOR", "generate_marp", "write_marp", "parse_marp", "read_marp"]

SLIDE_SEPARATOR = "\n\n---\n\n"

FRONT_MATTER = (
    "---\n"
    "marp: true\n"
    "theme: default\n"
    "paginate: true\n"
    "breaks: true\n"
    "---\n"
)

STYLE_TEMPLATE = (
    "<style>\n"
    "section {{ font-size: {font_size}px; line-height: {line_spacing}; }}\n"
    ".columns {{ display: flex; gap: 2rem; }}\n"
    ".columns > .col {{ flex: 1; }}\n"
    "</style>\n"
    "\n"
)

_STYLE_BLOCK_RE = re.compile(r"\A\s*<style>(.*?)</style>[ \t]*\n?", re.DOTALL | re.IGNORECASE)
_FONT_SIZE_RE = re.compile(r"font-size:\s*(\d+(?:\.\d+)?)px")
_LINE_HEIGHT_RE = re.compile(r"line-height:\s*(\d+(?:\.\d+)?)")
_SEPARATOR_LINE_RE = re.compile(r"^---[ \t]*$", re.MULTILINE)
_FRONT_MATTER_KEY_RE = re.compile(r"^\s*([A-Za-z_][\w-]*)\s*:\s*(.*?)\s*$")


def _format_number(value: float) -> str:
    # 1.5 -> "1.5", 2.0 -> "2"
    return f"{value:g}"


def generate_marp(deck: Deck, settings: StyleSettings) -> str:
    """
    Serialize *deck* into a Marp markdown document.

    Args:
        deck: Slides to export, in order
        settings: Deck style settings written into the ``<style>`` block

    Returns:
        The document text
    """
    style = STYLE_TEMPLATE.format(
        font_size=settings.font_size,
        line_spacing=_format_number(settings.line_spacing),
    )
    body = SLIDE_SEPARATOR.join(slide.text for slide in deck)
    return FRONT_MATTER + style + body


def write_marp(path, deck: Deck, settings: StyleSettings) -> Path:
    """Write the exported document to *path* as UTF-8."""
    out_path = Path(path)
    if out_path.parent and not out_path.parent.exists():
        out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(generate_marp(deck, settings), encoding="utf-8")
    logger.info(f"Marp deck written to {out_path} ({len(deck)} slides)")
    return out_path


def _split_front_matter(text: str) -> Tuple[dict, str]:
    md = MarkdownIt("commonmark").use(front_matter_plugin)
    tokens = md.parse(text)
    if not tokens or tokens[0].type != "front_matter":
        return {}, text

    token = tokens[0]
    meta = {}
    for line in token.content.splitlines():
        match = _FRONT_MATTER_KEY_RE.match(line)
        if match:
            meta[match.group(1)] = match.group(2).strip("'\"")

    lines = text.split("\n")
    body = "\n".join(lines[token.map[1]:])
    return meta, body


def parse_marp(text: str) -> Tuple[List[str], StyleSettings]:
    """
    Read a Marp document back into slide texts and style settings.

    Front matter is optional. A leading ``<style>`` block supplies font
    size and line height, and a ``size`` directive in the front matter
    selects the aspect ratio when it is one the editor knows.

    Args:
        text: Marp markdown

    Returns:
        ``(slide_texts, settings)``; there is always at least one slide
    """
    text = text.replace("\r\n", "\n")
    meta, body = _split_front_matter(text)
    settings = StyleSettings()

    size = meta.get("size")
    if size in ASPECT_RATIOS:
        settings.aspect_ratio = size

    style_match = _STYLE_BLOCK_RE.match(body)
    if style_match:
        css = style_match.group(1)
        font_match = _FONT_SIZE_RE.search(css)
        if font_match:
            settings.font_size = float(font_match.group(1))
        line_match = _LINE_HEIGHT_RE.search(css)
        if line_match:
            settings.line_spacing = float(line_match.group(1))
        body = body[style_match.end():]

    slides = [part.strip("\n") for part in _SEPARATOR_LINE_RE.split(body)]
    slides = [part for part in slides if part.strip()] or [""]
    logger.debug(f"Parsed {len(slides)} slides, {settings}")
    return slides, settings


def read_marp(path) -> Tuple[List[str], StyleSettings]:
    """Load a Marp file from disk; see :func:`parse_marp`."""
    return parse_marp(Path(path).read_text(encoding="utf-8"))
